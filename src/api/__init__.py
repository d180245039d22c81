"""
どこで: `api` 入口（高レベル公開 API）。
何を: ギャラリーの起動 `run_sketch` と、独自スケッチを書くための `sketch/Sketch/SketchContext`・
    `Geometry` を再輸出。
なぜ: 利用者が単一名前空間からスケッチ定義→起動まで完結できるようにするため。

Usage:
    from api import Sketch, SketchContext, sketch, run_sketch

    @sketch("my_sketch", label="My sketch", group="2D")
    class MySketch(Sketch):
        def setup(self, ctx: SketchContext) -> None:
            self.scene, self.camera = ctx.init_canvas(600, 600)

    run_sketch("my_sketch")
"""

from engine.core.geometry import Geometry
from sketches.base import Sketch
from sketches.context import SketchContext
from sketches.registry import sketch as sketch

from .sketch import run_sketch as run
from .sketch import run_sketch as run_sketch

__all__ = [
    "run_sketch",
    "run",
    "sketch",
    "Sketch",
    "SketchContext",
    "Geometry",
]

__version__ = "0.1.0"
