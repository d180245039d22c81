from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from engine.core.geometry import Geometry
from engine.export.image import unique_path
from util.constants import PRIMITIVE_RESTART_INDEX

line_mesh = pytest.importorskip("engine.render.line_mesh")


def test_primitive_restart_after_each_line(geom_two_lines: Geometry) -> None:
    verts, inds = line_mesh.geometry_to_vertices_indices(geom_two_lines)
    # N = 5, lines=2 → indices=5+2
    assert len(verts) == 5
    assert len(inds) == 7
    assert inds[2] == PRIMITIVE_RESTART_INDEX
    assert inds[6] == PRIMITIVE_RESTART_INDEX
    assert inds[[0, 1, 3, 4, 5]].tolist() == [0, 1, 2, 3, 4]


def test_empty_geometry_has_no_indices() -> None:
    verts, inds = line_mesh.geometry_to_vertices_indices(Geometry.empty())
    assert len(verts) == 0
    assert inds.dtype == np.uint32 and inds.size == 0


def test_unique_path_appends_counter(tmp_path: Path) -> None:
    p = tmp_path / "shot.png"
    assert unique_path(p) == p
    p.write_bytes(b"")
    assert unique_path(p) == tmp_path / "shot-1.png"
    (tmp_path / "shot-1.png").write_bytes(b"")
    assert unique_path(p) == tmp_path / "shot-2.png"
