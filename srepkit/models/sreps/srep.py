"""
Elliptical s-rep: a grid of skeletal points with up/down spokes plus a closed crest.

The crest runs along the outer ring of the grid. Crest point k sits at the
k-th entry of SkeletalGrid.outer_ring(), which starts at (0, 0), follows row 0,
goes down the last column, back along the last row and up column 0.
"""
from typing import Iterator, List, Optional, Tuple

import numpy as np

from srepkit import config
from srepkit.models.sreps.errors import InvalidState
from srepkit.models.sreps.spoke import Spoke


def _check_spoke(spoke, where):
    if not isinstance(spoke, Spoke):
        raise InvalidState("%s: expected a Spoke, got %r" % (where, type(spoke).__name__))
    if spoke.r is None or spoke.U is None or spoke.p is None:
        raise InvalidState("%s: incomplete spoke" % where)
    if spoke.U.shape != (3,) or spoke.p.shape != (3,):
        raise InvalidState("%s: spoke vectors must have 3 components" % where)
    if spoke.isnan() or not np.all(np.isfinite(spoke.U)) or not np.all(np.isfinite(spoke.p)) \
            or not np.isfinite(spoke.r):
        raise InvalidState("%s: spoke has non-finite values" % where)
    if spoke.r < 0:
        raise InvalidState("%s: negative spoke length %g" % (where, spoke.r))
    norm = np.linalg.norm(spoke.U)
    if abs(norm - 1.0) > config.UNIT_TOLERANCE:
        raise InvalidState("%s: spoke direction is not a unit vector (norm %g)" % (where, norm))


def _check_position(position, where):
    if position.shape != (3,) or not np.all(np.isfinite(position)):
        raise InvalidState("%s: position must be 3 finite coordinates" % where)


class SkeletalPoint(object):
    """A skeletal point with an optional spoke on each side of the skeletal sheet."""
    def __init__(self, position, up_spoke: Optional[Spoke] = None, down_spoke: Optional[Spoke] = None):
        self.position = np.array(position, dtype=np.float64)
        self.up_spoke = up_spoke
        self.down_spoke = down_spoke

    def copy(self):
        return SkeletalPoint(self.position,
                             None if self.up_spoke is None else self.up_spoke.copy(),
                             None if self.down_spoke is None else self.down_spoke.copy())

    def validate(self, where="skeletal point"):
        _check_position(self.position, where)
        if self.up_spoke is not None:
            _check_spoke(self.up_spoke, where + " up spoke")
        if self.down_spoke is not None:
            _check_spoke(self.down_spoke, where + " down spoke")

    def __eq__(self, another):
        if not isinstance(another, SkeletalPoint):
            return NotImplemented
        return np.array_equal(self.position, another.position) \
            and self.up_spoke == another.up_spoke \
            and self.down_spoke == another.down_spoke


class SkeletalGrid(object):
    """Rows of skeletal points; row index is u, column index is v."""
    def __init__(self, points: List[List[SkeletalPoint]]):
        self.points = [list(row) for row in points]

    @property
    def rows(self):
        return len(self.points)

    @property
    def cols(self):
        return len(self.points[0]) if self.points else 0

    @property
    def perimeter(self):
        return 2 * (self.rows + self.cols) - 4

    def __getitem__(self, index):
        r, c = index
        return self.points[r][c]

    def __iter__(self) -> Iterator[SkeletalPoint]:
        for row in self.points:
            for pt in row:
                yield pt

    def __len__(self):
        return self.rows * self.cols

    def outer_ring(self) -> List[Tuple[int, int]]:
        """(row, col) of the perimeter points in crest order, without repeating the start."""
        rows, cols = self.rows, self.cols
        ring = [(0, c) for c in range(cols)]
        ring += [(r, cols - 1) for r in range(1, rows)]
        ring += [(rows - 1, c) for c in range(cols - 2, -1, -1)]
        ring += [(r, 0) for r in range(rows - 2, 0, -1)]
        return ring

    def positions(self):
        """Array (rows, cols, 3) of skeletal positions."""
        return np.array([[pt.position for pt in row] for row in self.points], dtype=np.float64)

    def copy(self):
        return SkeletalGrid([[pt.copy() for pt in row] for row in self.points])

    def validate(self):
        if self.rows == 0 or self.cols == 0:
            raise InvalidState("The skeletal grid is empty")
        for r, row in enumerate(self.points):
            if len(row) != self.cols:
                raise InvalidState("Row %d has %d points, expected %d" % (r, len(row), self.cols))
        if self.rows < 2 or self.cols < 2:
            raise InvalidState("The skeletal grid needs at least 2 x 2 points, got %d x %d" % (self.rows, self.cols))
        for r, row in enumerate(self.points):
            for c, pt in enumerate(row):
                if not isinstance(pt, SkeletalPoint):
                    raise InvalidState("Grid entry (%d, %d) is not a SkeletalPoint" % (r, c))
                pt.validate("skeletal point (%d, %d)" % (r, c))

    def __eq__(self, another):
        if not isinstance(another, SkeletalGrid):
            return NotImplemented
        return self.points == another.points


class CrestPoint(object):
    def __init__(self, position, spoke: Spoke):
        self.position = np.array(position, dtype=np.float64)
        self.spoke = spoke

    def copy(self):
        return CrestPoint(self.position, self.spoke.copy())

    def __eq__(self, another):
        if not isinstance(another, CrestPoint):
            return NotImplemented
        return np.array_equal(self.position, another.position) and self.spoke == another.spoke


class Crest(object):
    """Closed loop of crest points. The last point connects back to the first."""
    def __init__(self, points: List[CrestPoint]):
        self.points = list(points)

    def __len__(self):
        return len(self.points)

    def __getitem__(self, i):
        return self.points[i]

    def __iter__(self) -> Iterator[CrestPoint]:
        return iter(self.points)

    def copy(self):
        return Crest([pt.copy() for pt in self.points])

    def validate(self):
        for i, pt in enumerate(self.points):
            if not isinstance(pt, CrestPoint):
                raise InvalidState("Crest entry %d is not a CrestPoint" % i)
            _check_position(pt.position, "crest point %d" % i)
            _check_spoke(pt.spoke, "crest point %d spoke" % i)

    def __eq__(self, another):
        if not isinstance(another, Crest):
            return NotImplemented
        return self.points == another.points


class EllipticalSRep(object):
    """
    A skeletal grid together with its crest.
    Both parts are held in one tuple so that assign() replaces them in a single step.
    """
    def __init__(self, grid: SkeletalGrid, crest: Crest):
        self._parts = (grid, crest)

    @property
    def grid(self) -> SkeletalGrid:
        return self._parts[0]

    @property
    def crest(self) -> Crest:
        return self._parts[1]

    def validate(self):
        """Raise InvalidState unless the grid is well formed and the crest matches its outer ring."""
        grid, crest = self._parts
        if not isinstance(grid, SkeletalGrid) or not isinstance(crest, Crest):
            raise InvalidState("An elliptical s-rep needs a SkeletalGrid and a Crest")
        grid.validate()
        crest.validate()
        if len(crest) != grid.perimeter:
            raise InvalidState("Crest has %d points but the outer ring of a %d x %d grid has %d"
                               % (len(crest), grid.rows, grid.cols, grid.perimeter))
        for k, (ri, ci) in enumerate(grid.outer_ring()):
            ring_pt = grid[ri, ci].position
            if np.linalg.norm(crest[k].position - ring_pt) > config.CREST_TOLERANCE:
                raise InvalidState("Crest point %d is off the outer ring point (%d, %d)" % (k, ri, ci))
            if np.linalg.norm(crest[k].spoke.p - ring_pt) > config.CREST_TOLERANCE:
                raise InvalidState("Crest spoke %d does not start at the outer ring point (%d, %d)" % (k, ri, ci))

    def copy(self):
        return EllipticalSRep(self.grid.copy(), self.crest.copy())

    def assign(self, another):
        """Take over the contents of another s-rep."""
        self._parts = another._parts

    def spokes(self) -> Iterator[Tuple[str, Spoke]]:
        """Yield ('up' | 'down' | 'crest', spoke) for every spoke."""
        for pt in self.grid:
            if pt.up_spoke is not None:
                yield 'up', pt.up_spoke
            if pt.down_spoke is not None:
                yield 'down', pt.down_spoke
        for pt in self.crest:
            yield 'crest', pt.spoke

    @property
    def num_points(self):
        return len(self.grid) + len(self.crest)

    def __eq__(self, another):
        if not isinstance(another, EllipticalSRep):
            return NotImplemented
        return self.grid == another.grid and self.crest == another.crest

    def __repr__(self):
        return "EllipticalSRep(%d x %d grid, %d crest points)" % (self.grid.rows, self.grid.cols, len(self.crest))
