from __future__ import annotations

import logging
import math

import numpy as np
import pytest

pytest.importorskip("numba")

import sketches  # noqa: F401,E402
from engine.core.camera import CenteredOrthographicCamera, PerspectiveCamera  # noqa: E402
from engine.core.controls import EasedOrbit, OrbitControls  # noqa: E402
from engine.core.scene import Group, LineObject, MeshObject  # noqa: E402
from engine.render.image_quad import rect_to_quad  # noqa: E402
from sketches.context import SketchContext  # noqa: E402
from sketches.registry import get_sketch  # noqa: E402


def _setup(name: str, renderer, loader=None, params=None, size=(800, 600)):  # noqa: ANN001, ANN202
    sk = get_sketch(name).factory(params)
    ctx = SketchContext(renderer, size[0], size[1], loader=loader)
    sk.setup(ctx)
    return sk, ctx


def test_terrain_wave_setup_and_animation(fake_renderer) -> None:  # noqa: ANN001
    sk, _ = _setup("terrain_wave", fake_renderer)
    assert sk.is_ready
    assert isinstance(sk.camera, PerspectiveCamera)
    assert np.allclose(sk.camera.position, (0.0, 80.0, 160.0))
    assert isinstance(sk.controls, OrbitControls)
    assert sk.terrain.material.wireframe
    before = sk.terrain.mesh.positions.copy()
    sk.tick(1 / 60)
    assert sk.frame_count == 1
    assert not np.array_equal(before[:, 1], sk.terrain.mesh.positions[:, 1])


def test_terrain_static_scene_contents(fake_renderer) -> None:  # noqa: ANN001
    sk, _ = _setup("terrain_static", fake_renderer)
    children = sk.scene.children
    lines = [c for c in children if isinstance(c, LineObject)]
    meshes = [c for c in children if isinstance(c, MeshObject)]
    assert len(lines) == 5
    assert len(meshes) == 1
    assert meshes[0].material.shininess == 10.0
    assert meshes[0].material.color[:3] == pytest.approx((0x22 / 255, 0x66 / 255, 0x22 / 255))
    axis_colors = [c.color[:3] for c in lines if c.name == "axis"]
    assert axis_colors == [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]


def test_contour_overlay_rotates_group(fake_renderer) -> None:  # noqa: ANN001
    sk, _ = _setup("contour_overlay", fake_renderer)
    group = sk.contours
    assert isinstance(group, Group)
    ops = [c.opacity for c in group.children]
    assert ops == [0.5, 0.5, 0.5, 0.5, 1.0]
    assert sk.scene.background[:3] == (0.0, 0.0, 0.0)
    for _ in range(3):
        sk.tick(1 / 60)
    assert group.rotation[1] == pytest.approx(0.03)


def test_cross_grid_is_static(fake_renderer) -> None:  # noqa: ANN001
    sk, _ = _setup("cross_grid", fake_renderer, params={"seed": 3})
    assert sk.loop is False
    assert (sk.camera.width, sk.camera.height) == (600.0, 600.0)
    assert len(sk.crosses.geometry) == 2 * 60 * 60
    assert sk.crosses.thickness == pytest.approx(2.0 / 600)
    version = sk.crosses.version
    sk.tick(1 / 60)
    assert sk.frame_count == 0
    assert sk.crosses.version == version


def test_cross_grid_same_seed_same_geometry(fake_renderer) -> None:  # noqa: ANN001
    a, _ = _setup("cross_grid", fake_renderer, params={"seed": 11})
    b, _ = _setup("cross_grid", fake_renderer, params={"seed": 11})
    assert np.array_equal(a.crosses.geometry.coords, b.crosses.geometry.coords)


def test_isolines_canvas(fake_renderer) -> None:  # noqa: ANN001
    sk, _ = _setup("isolines", fake_renderer, params={"seed": 2})
    assert sk.loop is False
    assert sk.scene.background == (1.0, 1.0, 1.0, 1.0)
    assert sk.lines.color == (0.0, 0.0, 0.0, 1.0)
    assert not sk.lines.geometry.is_empty


class TestImageBackground:
    def test_setup_requests_image_and_draws_terrain(self, fake_renderer, fake_loader) -> None:  # noqa: ANN001
        sk, _ = _setup("image_background", fake_renderer, fake_loader, params={"seed": 1})
        assert isinstance(sk.camera, CenteredOrthographicCamera)
        assert isinstance(sk.controls, EasedOrbit)
        assert len(fake_loader.requests) == 1
        assert fake_loader.requests[0][0].name == "4.png"
        assert sk.scene.background_image is None
        assert len(sk.terrain.geometry) == 2 * 50 * 50

    def test_success_sets_background(self, fake_renderer, fake_loader, tiny_image, caplog) -> None:  # noqa: ANN001
        caplog.set_level(logging.INFO, logger="sketches.image_background")
        sk, _ = _setup("image_background", fake_renderer, fake_loader)
        fake_loader.complete(tiny_image)
        assert sk.scene.background_image is tiny_image
        assert "Image loaded as background." in caplog.text

    def test_failure_logs_error_and_keeps_color(self, fake_renderer, fake_loader, caplog) -> None:  # noqa: ANN001
        caplog.set_level(logging.ERROR, logger="sketches.image_background")
        sk, _ = _setup("image_background", fake_renderer, fake_loader)
        fake_loader.fail(FileNotFoundError("4.png"))
        assert sk.scene.background_image is None
        assert "Failed to load image at path:" in caplog.text
        assert "4.png" in caplog.text

    def test_resize_stretches_image(self, fake_renderer, fake_loader, tiny_image) -> None:  # noqa: ANN001
        sk, ctx = _setup("image_background", fake_renderer, fake_loader)
        fake_loader.complete(tiny_image)
        ctx.resize(1024, 512)
        rect = sk.scene.background_image.draw_rect(fake_renderer.width, fake_renderer.height)
        assert rect == (0.0, 0.0, 1024.0, 512.0)
        quad = rect_to_quad(rect, fake_renderer.width, fake_renderer.height)
        assert np.array_equal(quad[:, :2], [[-1.0, -1.0], [1.0, -1.0], [-1.0, 1.0], [1.0, 1.0]])
        assert (sk.camera.width, sk.camera.height) == (1024.0, 512.0)
        assert sk.terrain.thickness == pytest.approx(2.0 * 0.5 / 512)

    def test_update_advances_time_and_geometry(self, fake_renderer, fake_loader) -> None:  # noqa: ANN001
        sk, _ = _setup("image_background", fake_renderer, fake_loader, params={"seed": 5})
        v0 = sk.terrain.version
        before = sk.terrain.geometry.coords.copy()
        sk.tick(1 / 60)
        sk.controls.tick(1 / 60)
        assert sk.time == pytest.approx(0.01)
        assert sk.terrain.version == v0 + 1
        assert not np.array_equal(before, sk.terrain.geometry.coords)

    def test_drag_moves_orbit_target(self, fake_renderer, fake_loader) -> None:  # noqa: ANN001
        sk, _ = _setup("image_background", fake_renderer, fake_loader)
        sk.on_drag(10.0, 0.0, "left", 600)
        assert sk.controls.target_theta == pytest.approx(-0.1)
        sk.controls.update()
        assert sk.controls.theta == pytest.approx(-0.01)
        r = math.sqrt(sum(float(v) ** 2 for v in sk.camera.position))
        assert r == pytest.approx(900.0)
