"""
どこで: `sketches.image_background`。
何を: 外部画像を非同期に読み込んで背景に敷き、その上に値ノイズで起伏する十字地形を周回カメラで描く。
なぜ: 描画ループを止めない画像読み込み（成功/失敗コールバック）と、リサイズ追従の例として。

挙動:
- 読み込み完了までは背景色のみ。成功時は `scene.background_image` に設定し info ログ。
- 失敗時は error ログのみ（代替画像・再試行はしない）。
- 画像は常に `(0, 0, width, height)` に引き伸ばす（縦横比は保たない）。
"""

from __future__ import annotations

import logging
from pathlib import Path

from effects.noise import ValueNoise
from effects.terrain import layered_height_map
from engine.core.camera import CenteredOrthographicCamera
from engine.core.controls import EasedOrbit
from engine.core.geometry import Geometry
from engine.core.scene import BackgroundImage, LineObject, Scene
from shapes.crosses import cross_field

from .base import Sketch
from .context import SketchContext
from .registry import sketch

logger = logging.getLogger(__name__)


@sketch("image_background", label="Image background + cross terrain", group="2D")
class ImageBackground(Sketch):
    defaults = {
        "image_path": "images/4.png",
        "background": (255, 252, 247),
        "cols": 50,
        "rows": 50,
        "spacing": 10.0,
        "half_arm": 4.0,
        "noise_scale": 0.08,
        "height_scale": 150.0,
        "time_step": 0.01,
        "radius": 900.0,
        "stroke": 0xFFFFFF,
        "stroke_weight": 0.5,
        "seed": None,
    }

    def setup(self, ctx: SketchContext) -> None:
        self._ctx = ctx
        self.scene = Scene(background=self.param("background"))
        self.camera = CenteredOrthographicCamera(ctx.width, ctx.height)
        self.controls = EasedOrbit(self.camera, radius=float(self.param("radius")))
        ctx.renderer.set_size(ctx.width, ctx.height)

        self.noise = ValueNoise(self.param("seed"))
        self.time = 0.0

        self.terrain = LineObject(
            self.build_terrain(),
            self.param("stroke"),
            thickness=ctx.stroke_thickness(self.param("stroke_weight")),
            name="cross_terrain",
        )
        self.scene.add(self.terrain)
        ctx.add_resize_handler(self.on_resize)
        ctx.load_image(self.param("image_path"), self.on_image_loaded, self.on_image_failed)

    def build_terrain(self) -> Geometry:
        heights = layered_height_map(
            self.noise,
            int(self.param("cols")),
            int(self.param("rows")),
            noise_scale=float(self.param("noise_scale")),
            time=self.time,
            height_scale=float(self.param("height_scale")),
        )
        return cross_field(heights, float(self.param("spacing")), float(self.param("half_arm")))

    # ---- 画像コールバック（メインスレッド） ----
    def on_image_loaded(self, image: BackgroundImage) -> None:
        self.scene.background_image = image
        logger.info("Image loaded as background.")

    def on_image_failed(self, path: Path, error: BaseException) -> None:
        logger.error("Failed to load image at path: %s", path)
        logger.debug("image load error: %r", error)

    # ---- フレーム/リサイズ ----
    def on_resize(self, width: int, height: int) -> None:
        self.camera.set_size(width, height)
        self.terrain.thickness = self._ctx.stroke_thickness(self.param("stroke_weight"))

    def update(self, dt: float) -> None:
        self.time += float(self.param("time_step"))
        self.terrain.geometry = self.build_terrain()
