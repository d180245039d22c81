"""
どこで: `sketches.terrain_wave`。
何を: 格子平面を改良 Perlin ノイズで毎フレーム上下に揺らすワイヤフレーム地形。
なぜ: 共通の 3D 土台（BaseScene）の上に、時間で変化する変位アニメーションを載せるため。
"""

from __future__ import annotations

from engine.core.grid_mesh import GridMesh
from engine.core.scene import Material, MeshObject
from effects.terrain import TerrainAnimator

from .base import Sketch
from .context import SketchContext
from .registry import sketch


@sketch("terrain_wave", label="Noise terrain (animated)", group="3D")
class TerrainWave(Sketch):
    defaults = {
        "width": 200.0,
        "depth": 200.0,
        "segments": 50,
        "speed": 0.5,
        "frequency": 0.03,
        "amplitude": 8.0,
        "camera_position": (0.0, 80.0, 160.0),
        "color": 0xFFFFFF,
    }

    def setup(self, ctx: SketchContext) -> None:
        base = ctx.init_base_scene()
        base.get_camera().set_position(*self.param("camera_position"))

        segments = int(self.param("segments"))
        mesh = GridMesh(self.param("width"), self.param("depth"), segments, segments)
        self.terrain = MeshObject(mesh, Material(color=self.param("color"), wireframe=True))
        base.get_scene().add(self.terrain)

        self.animator = TerrainAnimator(
            mesh,
            speed=self.param("speed"),
            frequency=self.param("frequency"),
            amplitude=self.param("amplitude"),
        )
        self.animator.apply()

        self.base = base
        self.scene = base.get_scene()
        self.camera = base.get_camera()
        self.controls = base.get_controls()

    def update(self, dt: float) -> None:
        self.animator.step()
