"""
どこで: `sketches.terrain_static`。
何を: 補助格子・座標軸・照明付きの平面だけを置いた静的な 3D シーン。
なぜ: 地形スケッチの土台（カメラ/ライト/オービット操作）の見え方を単体で確認するため。
"""

from __future__ import annotations

from engine.core.grid_mesh import GridMesh
from engine.core.scene import LineObject, Material, MeshObject
from shapes.helpers import axes_helper, grid_helper_parts

from .base import Sketch
from .context import SketchContext
from .registry import sketch

AXIS_COLORS = (0xFF0000, 0x00FF00, 0x0000FF)


@sketch("terrain_static", label="Static terrain", group="3D")
class TerrainStatic(Sketch):
    defaults = {
        "grid_size": 1000.0,
        "grid_divisions": 50,
        "center_color": 0x888888,
        "grid_color": 0x444444,
        "axes_size": 100.0,
        "plane_size": 400.0,
        "plane_segments": 100,
        "plane_color": 0x226622,
        "shininess": 10.0,
    }

    def setup(self, ctx: SketchContext) -> None:
        base = ctx.init_base_scene()
        scene = base.get_scene()

        center, rest = grid_helper_parts(self.param("grid_size"), int(self.param("grid_divisions")))
        scene.add(
            LineObject(rest, self.param("grid_color"), name="grid"),
            LineObject(center, self.param("center_color"), name="grid_center"),
        )
        for geom, color in zip(axes_helper(self.param("axes_size")), AXIS_COLORS):
            scene.add(LineObject(geom, color, name="axis"))

        n = int(self.param("plane_segments"))
        size = float(self.param("plane_size"))
        self.plane = MeshObject(
            GridMesh(size, size, n, n),
            Material(color=self.param("plane_color"), shininess=self.param("shininess")),
            name="plane",
        )
        scene.add(self.plane)

        self.base = base
        self.scene = scene
        self.camera = base.get_camera()
        self.controls = base.get_controls()
