from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.geometry import Geometry
from engine.core.scene import (
    BackgroundImage,
    DirectionalLight,
    Group,
    LineObject,
    Scene,
)


def _line() -> LineObject:
    return LineObject(Geometry.from_lines([[(1.0, 0.0, 0.0), (2.0, 0.0, 0.0)]]), 0xFFFFFF)


def test_group_rotation_applies_to_children() -> None:
    group = Group()
    line = _line()
    group.add(line)
    group.rotation[1] = math.pi / 2
    p = line.world_matrix() @ np.array([1.0, 0.0, 0.0, 1.0])
    # Y 軸 +90°: (1,0,0) → (0,0,-1)
    assert np.allclose(p[:3], [0.0, 0.0, -1.0], atol=1e-6)


def test_reparenting_moves_child() -> None:
    a, b = Group("a"), Group("b")
    line = _line()
    a.add(line)
    b.add(line)
    assert line.parent is b and a.children == [] and b.children == [line]


def test_traverse_skips_invisible_subtrees() -> None:
    scene = Scene()
    hidden = Group("hidden")
    hidden.visible = False
    hidden.add(_line())
    visible = _line()
    scene.add(hidden, visible)
    assert list(scene.traverse()) == [visible]


def test_line_object_version_and_opacity() -> None:
    line = _line()
    line.opacity = 0.5
    assert line.rgba == pytest.approx((1.0, 1.0, 1.0, 0.5))
    v = line.version
    line.geometry = Geometry.empty()
    assert line.version == v + 1


def test_directional_light_zero_vector_raises() -> None:
    with pytest.raises(ValueError):
        DirectionalLight(position=(0.0, 0.0, 0.0))


def test_background_image_rect_follows_canvas(tiny_image: BackgroundImage) -> None:
    assert tiny_image.draw_rect(640, 480) == (0.0, 0.0, 640.0, 480.0)
    assert tiny_image.draw_rect(1920, 200) == (0.0, 0.0, 1920.0, 200.0)


def test_scene_ambient_sum() -> None:
    from engine.core.scene import AmbientLight

    scene = Scene()
    scene.add_light(AmbientLight(color=(0.25, 0.25, 0.25), intensity=2.0))
    scene.add_light(AmbientLight(color=(0.5, 0.0, 0.0)))
    assert scene.ambient_rgb() == pytest.approx((1.0, 0.5, 0.5))
