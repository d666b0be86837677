"""Interpolate an elliptical s-rep to have a denser spoke field.

Every interpolation level doubles the linear resolution of the skeletal grid
and of the crest. Skeletal positions are interpolated bilinearly (or by cubic
Hermite patches), spoke directions along great circles and spoke lengths
linearly, first along u (rows) and then along v (columns). Coarse grid points
are carried over untouched, and the crest is rebuilt on the outer ring of the
densified grid.
"""
import logging

import numpy as np

from srepkit import config
from srepkit.models.sreps.errors import InvalidArgument, InvalidState
from srepkit.models.sreps.geometry import Geometry
from srepkit.models.sreps.spoke import Spoke
from srepkit.models.sreps.srep import Crest, CrestPoint, EllipticalSRep, SkeletalGrid, SkeletalPoint

logger = logging.getLogger(__name__)


## Definition of Hermitian spline functions
def h1(s):
    return 2*(s * s * s) - 3*(s * s) + 1
def h2(s):
    return -2*(s * s * s) + 3*(s * s)
def h3(s):
    return (s * s * s) - 2*(s * s) + s
def h4(s):
    return (s * s * s) - (s * s)


def _check_level(interpolate_level):
    if isinstance(interpolate_level, bool) or not isinstance(interpolate_level, (int, np.integer)):
        raise InvalidArgument("The interpolate_level has to be an integer, got %r" % (interpolate_level,))
    if interpolate_level < 0:
        raise InvalidArgument("The interpolate_level has to be non-negative, got %d" % interpolate_level)
    return int(interpolate_level)


class Interpolater(object):
    """
    Interpolate an EllipticalSRep.

    interpolate_level: each level doubles the density along both grid directions
    max_points: largest number of skeletal + crest points the output may have
    skeleton_scheme: 'linear' (bilinear) or 'hermite' (cubic Hermite patches
                     with finite-difference derivatives) for skeletal positions
    """
    def __init__(self, interpolate_level=config.DEFAULT_INTERPOLATION_LEVEL,
                 max_points=config.MAX_INTERPOLATED_POINTS, skeleton_scheme='linear'):
        self.interpolate_level = _check_level(interpolate_level)
        if isinstance(max_points, bool) or not isinstance(max_points, (int, np.integer)) or max_points <= 0:
            raise InvalidArgument("max_points has to be a positive integer, got %r" % (max_points,))
        self.max_points = int(max_points)
        if skeleton_scheme not in config.SKELETON_SCHEMES:
            raise InvalidArgument("Unknown skeleton_scheme %r, expected one of %s"
                                  % (skeleton_scheme, ", ".join(config.SKELETON_SCHEMES)))
        self.skeleton_scheme = skeleton_scheme

    def _check_size(self, input_srep, interpolate_level):
        """Return the number of output points, or raise if it exceeds max_points."""
        ## 2^level alone already exceeds any ceiling below it
        if interpolate_level >= self.max_points.bit_length():
            raise InvalidArgument("interpolate_level %d exceeds the limit of %d points"
                                  % (interpolate_level, self.max_points))
        num_steps = 2 ** interpolate_level
        rows, cols = input_srep.grid.rows, input_srep.grid.cols
        total = (num_steps * (rows - 1) + 1) * (num_steps * (cols - 1) + 1) + num_steps * len(input_srep.crest)
        if total > self.max_points:
            raise InvalidArgument("interpolate_level %d would produce %d points, the limit is %d"
                                  % (interpolate_level, total, self.max_points))
        return total

    def no_interpolate(self, input_srep):
        return input_srep.copy()

    @staticmethod
    def _locate(index, num_steps):
        """Enclosing coarse indices and fraction of a fine index; exact hits return the same index twice."""
        lower, rem = divmod(index, num_steps)
        if rem == 0:
            return lower, lower, 0.0
        return lower, lower + 1, rem / num_steps

    def _compute_derivative(self, grid):
        """Use finite difference to compute derivatives of skeletal positions along u and v"""
        positions = grid.positions()
        ## central differences inside, one-sided on the border
        dxdu = np.gradient(positions, axis=0)
        dxdv = np.gradient(positions, axis=1)
        return dxdu, dxdv

    def _interpolate_skeleton(self, relative_position, corner_pts, corner_deriv):
        """Interpolating skeletal sheet using Hermite spline functions.
        The interpolated position at (u, v) is given by p = H(u) * H_c * H(v), where H_c is determined by control points.
        """
        u, v = relative_position
        dxdu11, dxdv11, dxdu21, dxdv21, dxdu12, dxdv12, dxdu22, dxdv22 = corner_deriv
        x11, x21, x22, x12 = corner_pts
        zero = np.zeros(3)
        h_c = np.array([[x11,    x12,    dxdv11, dxdv12],
                        [x21,    x22,    dxdv21, dxdv22],
                        [dxdu11, dxdu12, zero,   zero],
                        [dxdu21, dxdu22, zero,   zero]])
        hu = np.array([h1(u), h2(u), h3(u), h4(u)])
        hv = np.array([h1(v), h2(v), h3(v), h4(v)])
        return np.einsum('i,ijk,j->k', hu, h_c, hv)

    def _interpolate_position(self, grid, cell, derivatives):
        (r0, r1, fu), (c0, c1, fv) = cell
        if self.skeleton_scheme == 'hermite':
            dxdu, dxdv = derivatives
            corner_pts = grid[r0, c0].position, grid[r1, c0].position, grid[r1, c1].position, grid[r0, c1].position
            corner_deriv = dxdu[r0, c0], dxdv[r0, c0], dxdu[r1, c0], dxdv[r1, c0], \
                dxdu[r0, c1], dxdv[r0, c1], dxdu[r1, c1], dxdv[r1, c1]
            return self._interpolate_skeleton((fu, fv), corner_pts, corner_deriv)
        left = Geometry.lerp(grid[r0, c0].position, grid[r1, c0].position, fu)
        if fv == 0:
            return left
        right = Geometry.lerp(grid[r0, c1].position, grid[r1, c1].position, fu)
        return Geometry.lerp(left, right, fv)

    def _interpolate_side(self, grid, cell, side, position):
        """
        Interpolate the up or down spoke of a cell. The side is absent in the result
        if any corner taking part in the interpolation lacks it.
        """
        (r0, r1, fu), (c0, c1, fv) = cell
        corner_spokes = [getattr(grid[r, c], side) for r in (r0, r1) for c in (c0, c1)]
        if any(spoke is None for spoke in corner_spokes):
            return None
        sp11, sp12, sp21, sp22 = corner_spokes
        interpolated_spoke = Spoke.bilinear(sp11, sp12, sp21, sp22, fu, fv)
        interpolated_spoke.p = np.array(position, dtype=np.float64)
        return interpolated_spoke

    def _interpolate_grid(self, grid, num_steps):
        derivatives = self._compute_derivative(grid) if self.skeleton_scheme == 'hermite' else None
        num_rows = num_steps * (grid.rows - 1) + 1
        num_cols = num_steps * (grid.cols - 1) + 1
        points = []
        for total_ri in range(num_rows):
            row_cell = self._locate(total_ri, num_steps)
            row = []
            for total_ci in range(num_cols):
                col_cell = self._locate(total_ci, num_steps)
                if row_cell[2] == 0 and col_cell[2] == 0:
                    ## primary skeletal point
                    row.append(grid[row_cell[0], col_cell[0]].copy())
                    continue
                cell = row_cell, col_cell
                position = self._interpolate_position(grid, cell, derivatives)
                up_spoke = self._interpolate_side(grid, cell, 'up_spoke', position)
                down_spoke = self._interpolate_side(grid, cell, 'down_spoke', position)
                row.append(SkeletalPoint(position, up_spoke, down_spoke))
            points.append(row)
        logger.debug("Interpolated skeletal grid %d x %d -> %d x %d", grid.rows, grid.cols, num_rows, num_cols)
        return SkeletalGrid(points)

    def _interpolate_crest(self, crest, interp_grid, num_steps):
        """
        Rebuild the crest on the outer ring of the interpolated grid.
        Crest spokes are interpolated along the closed loop; primary crest spokes are kept.
        """
        num_crest_points = len(crest)
        crest_points = []
        for k, (ri, ci) in enumerate(interp_grid.outer_ring()):
            position = interp_grid[ri, ci].position.copy()
            start, rem = divmod(k, num_steps)
            if rem == 0:
                spoke = crest[start].spoke.copy()
            else:
                end = (start + 1) % num_crest_points
                spoke = crest[start].spoke.interpolate(crest[end].spoke, rem / num_steps)
                spoke.p = position.copy()
            crest_points.append(CrestPoint(position, spoke))
        logger.debug("Interpolated crest %d -> %d points", num_crest_points, len(crest_points))
        return Crest(crest_points)

    def _verify_crest(self, interp_srep):
        grid, crest = interp_srep.grid, interp_srep.crest
        for k, (ri, ci) in enumerate(grid.outer_ring()):
            if np.linalg.norm(crest[k].position - grid[ri, ci].position) > config.CREST_TOLERANCE:
                raise InvalidState("Crest point %d drifted from the outer ring point (%d, %d)" % (k, ri, ci))

    def interpolate(self, input_srep, interpolate_level=None):
        """
        main entry of interpolation
        Return a new EllipticalSRep; input_srep is left unchanged.
        """
        if interpolate_level is None:
            interpolate_level = self.interpolate_level
        interpolate_level = _check_level(interpolate_level)
        if not isinstance(input_srep, EllipticalSRep):
            raise InvalidArgument("Expected an EllipticalSRep, got %r" % type(input_srep).__name__)
        input_srep.validate()
        total = self._check_size(input_srep, interpolate_level)
        logger.info("Interpolate an s-rep with interpolation_level = %d (%d points)", interpolate_level, total)

        if interpolate_level == 0:
            return self.no_interpolate(input_srep)

        # steps of interpolation
        num_steps = 2 ** interpolate_level
        interp_grid = self._interpolate_grid(input_srep.grid, num_steps)
        interp_crest = self._interpolate_crest(input_srep.crest, interp_grid, num_steps)
        interp_srep = EllipticalSRep(interp_grid, interp_crest)

        interp_srep.validate()
        self._verify_crest(interp_srep)
        return interp_srep

    def interpolate_into(self, input_srep, destination, interpolate_level=None):
        """
        Interpolate input_srep and replace the contents of destination with the result.
        destination is only touched once the result is complete.
        """
        if not isinstance(destination, EllipticalSRep):
            raise InvalidArgument("The destination has to be an EllipticalSRep, got %r" % type(destination).__name__)
        interp_srep = self.interpolate(input_srep, interpolate_level)
        destination.assign(interp_srep)
        return destination


def interpolate(srep, interpolate_level, **kwargs):
    """Return a denser copy of srep; see Interpolater for keyword arguments."""
    return Interpolater(interpolate_level, **kwargs).interpolate(srep)


def interpolate_into(srep, interpolate_level, destination, **kwargs):
    return Interpolater(interpolate_level, **kwargs).interpolate_into(srep, destination)
