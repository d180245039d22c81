from __future__ import annotations

import numpy as np

from shapes.helpers import axes_helper, grid_helper_parts


def test_grid_helper_line_counts() -> None:
    center, rest = grid_helper_parts(1000.0, 50)
    assert len(center) == 2
    assert len(rest) == 2 * 50
    assert np.allclose(np.abs(rest.coords[:, [0, 2]]).max(), 500.0)
    assert np.all((center.coords[:, 0] == 0.0) | (center.coords[:, 2] == 0.0))


def test_grid_helper_odd_divisions_have_no_center_line() -> None:
    center, rest = grid_helper_parts(10.0, 3)
    assert center.is_empty
    assert len(rest) == 8


def test_axes_point_along_each_axis() -> None:
    x, y, z = axes_helper(100.0)
    assert np.allclose(x.coords[-1], [100.0, 0.0, 0.0])
    assert np.allclose(y.coords[-1], [0.0, 100.0, 0.0])
    assert np.allclose(z.coords[-1], [0.0, 0.0, 100.0])
