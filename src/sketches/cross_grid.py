"""
どこで: `sketches.cross_grid`。
何を: 値ノイズで大きさが変わる十字を格子状に並べた 2D パターン（1 回だけ描く）。
なぜ: 同じシードとパラメータなら常に同じ絵になる静的な生成パターンの例として。
"""

from __future__ import annotations

from engine.core.scene import LineObject
from shapes.crosses import cross_grid

from .base import Sketch
from .context import SketchContext
from .registry import sketch


@sketch("cross_grid", label="Noise crosses", group="2D")
class CrossGrid(Sketch):
    loop = False
    size = (600, 600)
    defaults = {
        "width": 600,
        "height": 600,
        "spacing": 10,
        "noise_scale": 0.01,
        "seed": None,
        "background": "#77C98D",
        "stroke": 0xFFFFFF,
        "stroke_weight": 1.0,
    }

    def setup(self, ctx: SketchContext) -> None:
        w, h = int(self.param("width")), int(self.param("height"))
        self.scene, self.camera = ctx.init_canvas(w, h, background=self.param("background"))
        geometry = cross_grid(
            width=w,
            height=h,
            spacing=int(self.param("spacing")),
            noise_scale=float(self.param("noise_scale")),
            seed=self.param("seed"),
        )
        self.crosses = LineObject(
            geometry,
            self.param("stroke"),
            thickness=ctx.stroke_thickness(self.param("stroke_weight"), h),
            name="crosses",
        )
        self.scene.add(self.crosses)
