from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.geometry import Geometry, concat_all


def test_from_lines_normalizes_2d_and_offsets() -> None:
    xy = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]], dtype=np.float32)
    g = Geometry.from_lines([xy])
    assert g.coords.shape == (3, 3)
    assert g.offsets.tolist() == [0, 3]
    assert np.allclose(g.coords[:, 2], 0.0)


def test_from_segments_builds_two_point_lines() -> None:
    seg = np.array([[[0, 0], [1, 0]], [[0, 1], [0, 2]]], dtype=np.float32)
    g = Geometry.from_segments(seg)
    assert len(g) == 2
    assert g.offsets.tolist() == [0, 2, 4]
    assert np.allclose(g.coords[3], [0.0, 2.0, 0.0])


def test_from_segments_empty_and_invalid() -> None:
    assert Geometry.from_segments(np.empty((0, 2, 2))).is_empty
    with pytest.raises(ValueError):
        Geometry.from_segments(np.zeros((3, 3, 2)))


def test_constructor_invalid_offsets_raises() -> None:
    coords = np.zeros((2, 3), dtype=np.float32)
    with pytest.raises(ValueError):
        Geometry(coords, np.array([0, 1], dtype=np.int32))


def test_as_arrays_view_is_readonly(geom_two_lines: Geometry) -> None:
    coords, offsets = geom_two_lines.as_arrays()
    with pytest.raises(ValueError):
        coords[0, 0] = 1.0
    c2, _ = geom_two_lines.as_arrays(copy=True)
    c2[0, 0] = 5.0
    assert geom_two_lines.coords[0, 0] == 0.0


def test_transforms_are_pure_and_chain() -> None:
    g = Geometry.from_lines([np.array([[1.0, 0.0, 0.0]], dtype=np.float32)])
    g2 = g.translate(1.0, 1.0, 0.0).scale(2.0).rotate(z=math.pi / 2)
    # (1,0,0) → (2,1,0) → (4,2,0) → rotZ90 = (-2,4,0)
    assert np.allclose(g2.coords, [[-2.0, 4.0, 0.0]], atol=1e-5)
    assert np.allclose(g.coords, [[1.0, 0.0, 0.0]])


def test_concat_and_concat_all_shift_offsets(geom_two_lines: Geometry) -> None:
    both = geom_two_lines + geom_two_lines
    assert both.offsets.tolist() == [0, 2, 5, 7, 10]
    merged = concat_all([geom_two_lines, Geometry.empty(), geom_two_lines])
    assert merged.offsets.tolist() == both.offsets.tolist()
    assert np.array_equal(merged.coords, both.coords)
    assert concat_all([]).is_empty


def test_lines_iterates_polylines(geom_two_lines: Geometry) -> None:
    sizes = [line.shape[0] for line in geom_two_lines.lines()]
    assert sizes == [2, 3]
