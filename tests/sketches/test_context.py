from __future__ import annotations

import math

import pytest

from engine.core.camera import OrthographicCamera
from sketches.context import SketchContext


def test_resize_updates_renderer_and_handlers(fake_renderer) -> None:  # noqa: ANN001
    ctx = SketchContext(fake_renderer, 800, 600)
    seen: list[tuple[int, int]] = []
    ctx.add_resize_handler(lambda w, h: seen.append((w, h)))
    ctx.resize(1024, 768)
    assert (ctx.width, ctx.height) == (1024, 768)
    assert fake_renderer.sizes[-1] == (1024, 768)
    assert seen == [(1024, 768)]


def test_resize_ignores_minimized(fake_renderer) -> None:  # noqa: ANN001
    ctx = SketchContext(fake_renderer, 800, 600)
    ctx.resize(0, 0)
    assert (ctx.width, ctx.height) == (800, 600)
    assert fake_renderer.sizes == []


def test_init_base_scene_follows_resize(fake_renderer) -> None:  # noqa: ANN001
    ctx = SketchContext(fake_renderer, 800, 600)
    base = ctx.init_base_scene()
    ctx.resize(1000, 500)
    assert math.isclose(base.get_camera().aspect, 2.0)


def test_init_canvas_keeps_logical_size(fake_renderer) -> None:  # noqa: ANN001
    ctx = SketchContext(fake_renderer, 1280, 720)
    scene, cam = ctx.init_canvas(600, 600, background="#77C98D")
    assert isinstance(cam, OrthographicCamera)
    assert (cam.width, cam.height) == (600.0, 600.0)
    assert fake_renderer.sizes[-1] == (1280, 720)
    assert scene.background[0] == pytest.approx(0x77 / 255)


def test_load_image_without_loader_raises(fake_renderer) -> None:  # noqa: ANN001
    ctx = SketchContext(fake_renderer, 10, 10)
    with pytest.raises(RuntimeError):
        ctx.load_image("a.png", lambda img: None)


def test_load_image_resolves_relative_path(fake_renderer, fake_loader) -> None:  # noqa: ANN001
    ctx = SketchContext(fake_renderer, 10, 10, loader=fake_loader)
    resolved = ctx.load_image("images/4.png", lambda img: None)
    assert resolved.is_absolute()
    assert resolved.parts[-2:] == ("images", "4.png")
    assert fake_loader.requests[0][0] == resolved


def test_stroke_thickness() -> None:
    ctx = SketchContext(None, 800, 600)
    assert ctx.stroke_thickness(1.0) == pytest.approx(2.0 / 600)
    assert ctx.stroke_thickness(1.0, 400) == pytest.approx(2.0 / 400)
    with pytest.raises(ValueError):
        ctx.stroke_thickness(1.0, 0)
