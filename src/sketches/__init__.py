"""
どこで: `sketches` パッケージ。
何を: ギャラリーに並ぶスケッチ群。import 時に各モジュールが `@sketch` で自己登録する。
なぜ: ランナー/CLI は `sketches.registry` だけを見れば全スケッチを列挙・起動できるようにするため。

グループと登録順:
- 3D: terrain_wave, terrain_static, contour_overlay
- 2D: cross_grid, image_background, isolines
"""

from . import terrain_wave  # noqa: F401  (登録のための import)
from . import terrain_static  # noqa: F401
from . import contour_overlay  # noqa: F401
from . import cross_grid  # noqa: F401
from . import image_background  # noqa: F401
from . import isolines  # noqa: F401
from .base import Sketch
from .context import SketchContext
from .registry import (
    SketchInfo,
    get_sketch,
    grouped_sketches,
    list_sketches,
    resolve_initial_sketch,
    sketch,
)

__all__ = [
    "Sketch",
    "SketchContext",
    "SketchInfo",
    "sketch",
    "get_sketch",
    "list_sketches",
    "grouped_sketches",
    "resolve_initial_sketch",
]
