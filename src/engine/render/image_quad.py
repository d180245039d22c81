"""
どこで: `engine.render.image_quad`。
何を: 背景画像のテクスチャと、`BackgroundImage.draw_rect()` の矩形を NDC に写した四角形。
なぜ: 画像をキャンバス座標の矩形で指定し、ビューポートが変わっても同じ規則で引き伸ばすため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

from engine.core.scene import BackgroundImage

Rect = tuple[float, float, float, float]


def rect_to_quad(rect: Rect, canvas_width: float, canvas_height: float) -> np.ndarray:
    """キャンバス矩形 `(x, y, w, h)`（原点左上・Y 下向き）を `(x, y, u, v)` の triangle strip に写す。

    画像データは下の行から並ぶので v=0 が下端。

    例外:
        ValueError: キャンバスサイズが正でない場合。
    """
    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError(f"キャンバスサイズは正である必要があります: {(canvas_width, canvas_height)}")
    x, y, w, h = (float(v) for v in rect)
    left = 2.0 * x / canvas_width - 1.0
    right = 2.0 * (x + w) / canvas_width - 1.0
    top = 1.0 - 2.0 * y / canvas_height
    bottom = 1.0 - 2.0 * (y + h) / canvas_height
    return np.array(
        [
            [left, bottom, 0.0, 0.0],
            [right, bottom, 1.0, 0.0],
            [left, top, 0.0, 1.0],
            [right, top, 1.0, 1.0],
        ],
        dtype=np.float32,
    )


class ImageQuad:
    def __init__(self, ctx: Any, program: Any):
        self.ctx = ctx
        self.program = program
        self._vertices = rect_to_quad((0.0, 0.0, 1.0, 1.0), 1.0, 1.0)
        self.vbo = ctx.buffer(self._vertices.tobytes())
        self.vao = ctx.vertex_array(program, [(self.vbo, "2f 2f", "in_pos", "in_uv")])
        self.texture: Any | None = None
        self._source: BackgroundImage | None = None

    def sync(self, image: BackgroundImage) -> Any:
        """画像が差し替わった場合のみテクスチャを作り直し、現在のテクスチャを返す。"""
        if self._source is image and self.texture is not None:
            return self.texture
        if self.texture is not None:
            self.texture.release()
        self.texture = self.ctx.texture((image.width, image.height), 4, image.pixels)
        self.texture.build_mipmaps()
        self._source = image
        return self.texture

    def render(self, image: BackgroundImage, canvas_width: float, canvas_height: float) -> None:
        """`image.draw_rect(canvas_width, canvas_height)` の位置に画像を描く。"""
        rect = image.draw_rect(canvas_width, canvas_height)
        vertices = rect_to_quad(rect, canvas_width, canvas_height)
        if not np.array_equal(vertices, self._vertices):
            self.vbo.write(vertices.tobytes())
            self._vertices = vertices
        texture = self.sync(image)
        texture.use(location=0)
        self.vao.render(mode=self.ctx.TRIANGLE_STRIP)

    def release(self) -> None:
        if self.texture is not None:
            self.texture.release()
            self.texture = None
        self.vao.release()
        self.vbo.release()


__all__ = ["ImageQuad", "rect_to_quad"]
