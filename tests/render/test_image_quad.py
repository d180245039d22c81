from __future__ import annotations

import numpy as np
import pytest

from engine.core.scene import BackgroundImage
from engine.render.image_quad import ImageQuad, rect_to_quad


class _Buffer:
    def __init__(self, data: bytes) -> None:
        self.data = data

    def write(self, data: bytes) -> None:
        self.data = data

    def release(self) -> None:
        pass


class _Texture:
    def __init__(self, size: tuple[int, int]) -> None:
        self.size = size
        self.released = False

    def build_mipmaps(self) -> None:
        pass

    def use(self, location: int = 0) -> None:
        pass

    def release(self) -> None:
        self.released = True


class _Vao:
    def __init__(self) -> None:
        self.draws: list[int] = []

    def render(self, mode: int) -> None:
        self.draws.append(mode)

    def release(self) -> None:
        pass


class _Context:
    TRIANGLE_STRIP = 5

    def buffer(self, data: bytes) -> _Buffer:
        return _Buffer(data)

    def vertex_array(self, program, content) -> _Vao:  # noqa: ANN001
        return _Vao()

    def texture(self, size, components, data) -> _Texture:  # noqa: ANN001
        return _Texture(size)


def _positions(buf: _Buffer) -> np.ndarray:
    return np.frombuffer(buf.data, dtype=np.float32).reshape(4, 4)[:, :2]


FULL = [[-1.0, -1.0], [1.0, -1.0], [-1.0, 1.0], [1.0, 1.0]]


def test_full_canvas_rect_covers_clip_space() -> None:
    quad = rect_to_quad((0.0, 0.0, 800.0, 600.0), 800.0, 600.0)
    assert quad.dtype == np.float32
    assert np.array_equal(quad[:, :2], FULL)
    # 画像は下の行から並ぶので v=0 が下端
    assert np.array_equal(quad[:, 2:], [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])


def test_partial_rect_uses_top_left_origin() -> None:
    quad = rect_to_quad((100.0, 50.0, 200.0, 100.0), 400.0, 200.0)
    assert np.allclose(quad[:, :2], [[-0.5, -0.5], [0.5, -0.5], [-0.5, 0.5], [0.5, 0.5]])


def test_rect_rejects_empty_canvas() -> None:
    with pytest.raises(ValueError):
        rect_to_quad((0.0, 0.0, 1.0, 1.0), 0.0, 10.0)


def test_quad_follows_canvas_after_resize(tiny_image: BackgroundImage) -> None:
    quad = ImageQuad(_Context(), program=None)
    quad.render(tiny_image, 800, 600)
    assert np.array_equal(_positions(quad.vbo), FULL)
    quad.render(tiny_image, 1024, 512)
    assert np.array_equal(_positions(quad.vbo), FULL)
    assert quad.vao.draws == [_Context.TRIANGLE_STRIP] * 2


def test_texture_is_rebuilt_only_for_new_image(tiny_image: BackgroundImage) -> None:
    quad = ImageQuad(_Context(), program=None)
    quad.render(tiny_image, 10, 10)
    first = quad.texture
    quad.render(tiny_image, 20, 20)
    assert quad.texture is first

    other = BackgroundImage(1, 1, bytes(4), source="other.png")
    quad.render(other, 20, 20)
    assert first.released
    assert quad.texture.size == (1, 1)
