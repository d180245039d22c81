from __future__ import annotations

import numpy as np
import pytest

from engine.core.grid_mesh import GridMesh


def test_plane_layout_and_counts() -> None:
    m = GridMesh(200, 100, 4, 2)
    assert m.vertex_count == 5 * 3
    assert m.triangle_count == 4 * 2 * 2
    xs = m.positions[:, 0]
    zs = m.positions[:, 2]
    assert xs.min() == pytest.approx(-100.0) and xs.max() == pytest.approx(100.0)
    assert zs.min() == pytest.approx(-50.0) and zs.max() == pytest.approx(50.0)
    assert np.all(m.positions[:, 1] == 0.0)


def test_flat_plane_normals_point_up() -> None:
    m = GridMesh(10, 10, 3, 3)
    assert np.allclose(m.normals, [0.0, 1.0, 0.0])


def test_set_heights_keeps_xz_and_bumps_version() -> None:
    m = GridMesh(10, 10, 2, 2)
    v0 = m.version
    h = np.arange(m.vertex_count, dtype=np.float32)
    m.set_heights(h)
    assert m.version == v0 + 1
    assert np.array_equal(m.positions[:, 1], h)
    assert np.array_equal(m.positions[:, [0, 2]], m.original_positions[:, [0, 2]])


def test_set_heights_length_mismatch_raises() -> None:
    m = GridMesh(10, 10, 2, 2)
    with pytest.raises(ValueError):
        m.set_heights(np.zeros(3))


def test_original_positions_are_readonly_and_reset_restores() -> None:
    m = GridMesh(10, 10, 2, 2)
    with pytest.raises(ValueError):
        m.original_positions[0, 1] = 1.0
    m.set_heights(np.ones(m.vertex_count))
    m.reset()
    assert np.array_equal(m.positions, m.original_positions)


def test_edges_are_unique_pairs() -> None:
    m = GridMesh(10, 10, 1, 1)
    # 正方形 1 枚 = 2 三角形: 外周 4 辺 + 対角線 1 本
    assert m.edges.shape == (5, 2)


@pytest.mark.parametrize("args", [(0, 10, 1, 1), (10, 10, 0, 1)])
def test_invalid_arguments_raise(args) -> None:  # noqa: ANN001
    with pytest.raises(ValueError):
        GridMesh(*args)


def test_interleaved_has_position_and_normal() -> None:
    m = GridMesh(10, 10, 1, 1)
    data = m.interleaved()
    assert data.shape == (4, 6)
    assert data.dtype == np.float32
