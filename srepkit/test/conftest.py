import numpy as np
import pytest

from srepkit.models.sreps import Crest, CrestPoint, EllipticalSRep, SkeletalGrid, SkeletalPoint, Spoke


def _unit(vec):
    vec = np.asarray(vec, dtype=np.float64)
    return vec / np.linalg.norm(vec)


def build_srep(num_rows=3, num_cols=3, rx=4.0, ry=2.0):
    """
    A flat elliptical s-rep in the z = 0 plane.
    Up/down spokes lean outwards above/below the plane, crest spokes point away from the center.
    """
    points = []
    for r in range(num_rows):
        row = []
        for c in range(num_cols):
            x = rx * (2.0 * c / (num_cols - 1) - 1.0)
            y = ry * (2.0 * r / (num_rows - 1) - 1.0)
            pos = np.array([x, y, 0.0])
            up = Spoke(1.0 + 0.1 * r + 0.05 * c, _unit([0.3 * x, 0.3 * y, 1.0]), pos)
            down = Spoke(1.2 - 0.1 * r + 0.02 * c, _unit([0.3 * x, 0.3 * y, -1.0]), pos)
            row.append(SkeletalPoint(pos, up, down))
        points.append(row)
    grid = SkeletalGrid(points)

    crest_points = []
    for k, (r, c) in enumerate(grid.outer_ring()):
        pos = grid[r, c].position
        crest_points.append(CrestPoint(pos, Spoke(0.5 + 0.01 * k, _unit([pos[0], pos[1], 0.0]), pos)))
    return EllipticalSRep(grid, Crest(crest_points))


@pytest.fixture
def make_srep():
    return build_srep


@pytest.fixture
def srep():
    return build_srep(3, 3)
