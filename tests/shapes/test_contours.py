from __future__ import annotations

import numpy as np
import pytest

from shapes.contours import (
    INNER_OPACITY,
    OUTER_OPACITY,
    circle_xz,
    contour_opacity,
    contour_radii,
)


def test_five_radii_from_half_to_two_and_a_half() -> None:
    assert contour_radii().tolist() == [0.5, 1.0, 1.5, 2.0, 2.5]


def test_radii_edge_cases() -> None:
    assert contour_radii(1.0, 0.5, 0.5).size == 0
    assert contour_radii(1.0, 1.0, 0.5).tolist() == [1.0]
    with pytest.raises(ValueError):
        contour_radii(0.5, 2.5, 0.0)


def test_circle_is_closed_in_xz_plane() -> None:
    pts = circle_xz(2.0, 32)
    assert pts.shape == (33, 3)
    assert np.array_equal(pts[0], pts[-1])
    assert np.all(pts[:, 1] == 0.0)
    assert np.allclose(np.hypot(pts[:, 0], pts[:, 2]), 2.0, atol=1e-5)


def test_circle_requires_three_segments() -> None:
    with pytest.raises(ValueError):
        circle_xz(1.0, 2)


def test_only_outermost_circle_is_opaque() -> None:
    radii = contour_radii()
    ops = [contour_opacity(float(r), float(radii[-1])) for r in radii]
    assert ops == [INNER_OPACITY] * 4 + [OUTER_OPACITY]

