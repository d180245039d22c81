"""
どこで: `sketches.isolines`。
何を: 値ノイズ場の等値線（marching squares）を複数の閾値で重ねて描く 2D スケッチ。
"""

from __future__ import annotations

from engine.core.scene import LineObject
from shapes.isolines import isolines

from .base import Sketch
from .context import SketchContext
from .registry import sketch


@sketch("isolines", label="Noise isolines", group="2D")
class Isolines(Sketch):
    loop = False
    size = (800, 800)
    defaults = {
        "width": 800,
        "height": 800,
        "cols": 90,
        "rows": 90,
        "scale": 0.05,
        "levels": (50.0, 100.0, 150.0, 200.0),
        "seed": None,
        "background": 0xFFFFFF,
        "stroke": 0x000000,
        "stroke_weight": 1.0,
    }

    def setup(self, ctx: SketchContext) -> None:
        w, h = int(self.param("width")), int(self.param("height"))
        self.scene, self.camera = ctx.init_canvas(w, h, background=self.param("background"))
        geometry = isolines(
            width=w,
            height=h,
            cols=int(self.param("cols")),
            rows=int(self.param("rows")),
            scale=float(self.param("scale")),
            levels=tuple(float(v) for v in self.param("levels")),
            seed=self.param("seed"),
        )
        self.lines = LineObject(
            geometry,
            self.param("stroke"),
            thickness=ctx.stroke_thickness(self.param("stroke_weight"), h),
            name="isolines",
        )
        self.scene.add(self.lines)
