"""
どこで: `sketches.contour_overlay`。
何を: XZ 平面上の同心円（等高線風）をグループ化し、Y 軸周りにゆっくり回す。
なぜ: 線の不透明度（内側は半透明・外周は不透明）とグループ変換の例として。
"""

from __future__ import annotations

from engine.core.geometry import Geometry
from engine.core.scene import Group, LineObject
from shapes.contours import circle_xz, contour_opacity, contour_radii

from .base import Sketch
from .context import SketchContext
from .registry import sketch


@sketch("contour_overlay", label="Contour circles", group="3D")
class ContourOverlay(Sketch):
    defaults = {
        "start": 0.5,
        "stop": 2.5,
        "step": 0.5,
        "segments": 32,
        "rotation_speed": 0.01,
        "color": 0xFFFFFF,
        "background": 0x000000,
        "camera_position": (0.0, 4.0, 5.0),
    }

    def setup(self, ctx: SketchContext) -> None:
        # 半径数単位のシーンなので、オービットの距離制限も同じ縮尺にする
        base = ctx.init_base_scene(
            background=self.param("background"),
            near=0.1,
            far=100.0,
            camera_position=tuple(self.param("camera_position")),
            min_distance=1.0,
            max_distance=50.0,
        )

        radii = contour_radii(self.param("start"), self.param("stop"), self.param("step"))
        outer = float(radii[-1]) if radii.size else 0.0
        self.contours = Group("contours")
        for r in radii:
            line = Geometry.from_lines([circle_xz(float(r), int(self.param("segments")))])
            self.contours.add(
                LineObject(
                    line,
                    self.param("color"),
                    opacity=contour_opacity(float(r), outer),
                    name=f"contour_{r:g}",
                )
            )
        base.get_scene().add(self.contours)

        self.base = base
        self.scene = base.get_scene()
        self.camera = base.get_camera()
        self.controls = base.get_controls()

    def update(self, dt: float) -> None:
        self.contours.rotation[1] += float(self.param("rotation_speed"))
