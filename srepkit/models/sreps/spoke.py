import math

import numpy as np

from srepkit.models.sreps.errors import InvalidArgument
from srepkit.models.sreps.geometry import Geometry


class Spoke(object):
    """
    A spoke emanating from a skeletal point p in the unit direction U with length r.
    The boundary (tip) point is p + r * U.
    """
    def __init__(self, radius=None, direction=None, base_pt=None, bdry_pt=None):
        self.r = None if radius is None else float(radius)
        self.U = None if direction is None else np.array(direction, dtype=np.float64)
        self.p = None if base_pt is None else np.array(base_pt, dtype=np.float64)

        if bdry_pt is not None:
            ## compute r, U from base_pt and bdry_pt
            if base_pt is None:
                raise InvalidArgument("Need both the skeletal point and bdry point")
            s = np.array(bdry_pt, dtype=np.float64) - self.p
            self.r = float(np.linalg.norm(s))
            if self.r == 0:
                raise InvalidArgument("The boundary point coincides with the skeletal point")
            self.U = s / self.r

    def getB(self):
        return self.p + self.r * self.U

    def isnan(self):
        if math.isnan(self.r) or np.any(np.isnan(self.U)) or np.any(np.isnan(self.p)):
            return True
        return False

    def copy(self):
        return Spoke(self.r, self.U, self.p)

    def interpolate(self, another, t):
        """Spoke at fraction t from self to another: linear base point and length, great-circle direction."""
        assert isinstance(another, Spoke)
        if t == 0:
            return self.copy()
        if t == 1:
            return another.copy()
        return Spoke(float(Geometry.lerp(self.r, another.r, t)),
                     Geometry.slerp(self.U, another.U, t),
                     Geometry.lerp(self.p, another.p, t))

    @staticmethod
    def bilinear(sp11, sp12, sp21, sp22, u, v):
        """
        Interpolate inside the quad sp11 (u=0, v=0), sp12 (u=0, v=1), sp21 (u=1, v=0), sp22 (u=1, v=1).
        Interpolation runs along u first, then the two intermediate spokes are blended along v.
        """
        left = sp11.interpolate(sp21, u)
        if v == 0:
            return left
        right = sp12.interpolate(sp22, u)
        return left.interpolate(right, v)

    def allclose(self, another, atol=1e-9):
        return abs(self.r - another.r) <= atol \
            and np.allclose(self.U, another.U, rtol=0, atol=atol) \
            and np.allclose(self.p, another.p, rtol=0, atol=atol)

    def __eq__(self, another):
        if not isinstance(another, Spoke):
            return NotImplemented
        return self.r == another.r \
            and np.array_equal(self.U, another.U) \
            and np.array_equal(self.p, another.p)

    def __repr__(self):
        return "Spoke(r=%r, U=%r, p=%r)" % (self.r, self.U.tolist(), self.p.tolist())
