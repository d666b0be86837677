import logging
import warnings

import numpy as np
import numpy.linalg as LA
from scipy.spatial.transform import Rotation as R

from srepkit import config
from srepkit.models.sreps.errors import NumericDegeneracy

logger = logging.getLogger(__name__)


class Geometry:
    @staticmethod
    def normalize(vec):
        vec = np.asarray(vec, dtype=np.float64)
        return vec / LA.norm(vec)

    @staticmethod
    def lerp(a, b, t):
        """Linear interpolation; t == 0 and t == 1 return exact copies of the end values."""
        if t == 0:
            return np.array(a, dtype=np.float64)
        if t == 1:
            return np.array(b, dtype=np.float64)
        return (1.0 - t) * np.asarray(a, dtype=np.float64) + t * np.asarray(b, dtype=np.float64)

    @staticmethod
    def antipodal_midpoint(a):
        """
        Direction halfway between a and -a.

        The great circle through a and -a is not unique, so it is fixed to pass
        through normalize(a x REFERENCE_AXIS), which is orthogonal to a and to the
        reference axis. When a is (nearly) parallel to the reference axis the
        secondary axis is used instead.
        """
        a = np.asarray(a, dtype=np.float64)
        mid = np.cross(a, config.REFERENCE_AXIS)
        if LA.norm(mid) < config.AXIS_TOLERANCE:
            mid = np.cross(a, config.SECONDARY_AXIS)
        return mid / LA.norm(mid)

    @staticmethod
    def slerp(a, b, t):
        """
        Great-circle interpolation between unit vectors a and b.

        The result is a rotated by t * theta about a x b, theta being the angle
        between a and b. Opposite inputs are resolved by antipodal_midpoint and
        reported with a NumericDegeneracy warning.
        """
        a = np.asarray(a, dtype=np.float64)
        b = np.asarray(b, dtype=np.float64)
        if t == 0:
            return a.copy()
        if t == 1:
            return b.copy()

        cos_theta = float(np.clip(np.dot(a, b), -1.0, 1.0))
        if cos_theta <= -1.0 + config.ANTIPODAL_TOLERANCE:
            msg = "Opposite spoke directions %s and %s, using the tie-break great circle" % (a, b)
            logger.warning(msg)
            warnings.warn(msg, NumericDegeneracy, stacklevel=2)
            ## rotating a by a quarter turn about this axis gives the midpoint
            axis = np.cross(a, Geometry.antipodal_midpoint(a))
            theta = np.pi
        else:
            axis = np.cross(a, b)
            sin_theta = LA.norm(axis)
            if sin_theta < config.PARALLEL_TOLERANCE:
                return Geometry.normalize(Geometry.lerp(a, b, t))
            axis = axis / sin_theta
            theta = np.arctan2(sin_theta, cos_theta)

        rotated = R.from_rotvec(axis * (theta * t)).apply(a)
        return rotated / LA.norm(rotated)
