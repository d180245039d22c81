"""
どこで: `shapes.crosses`。
何を: 十字記号の配置計算と線分化。
    - 2D: キャンバス格子の各点で値ノイズからサイズを決めた十字（静的パターン）。
    - 3D: 高さマップ上の各点に置く固定サイズの十字（十字地形）。
なぜ: 「どこに・どの大きさで」置くかの純粋な計算を描画から切り離し、決定性を検証できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from common.param_utils import map_range
from effects.noise import ValueNoise
from engine.core.geometry import Geometry


@dataclass(frozen=True)
class CrossMark:
    """中心 `(x, y)` と全長 `size` の十字。"""

    x: float
    y: float
    size: float


def cross_marks(
    width: int,
    height: int,
    spacing: int,
    noise_scale: float,
    noise: ValueNoise,
    size_range: tuple[float, float] | None = None,
) -> list[CrossMark]:
    """`range(0, width, spacing)` × `range(0, height, spacing)` の各点に十字を配置する。

    サイズは `map(noise(x*s, y*s), 0, 1, lo, hi)`。`size_range` 省略時は `(2, spacing*1.2)`。
    同じ引数（とノイズのシード）なら常に同じ結果を返す。
    """
    if int(spacing) <= 0:
        raise ValueError(f"spacing は正である必要があります: {spacing}")
    lo, hi = size_range if size_range is not None else (2.0, spacing * 1.2)
    xs = np.arange(0, int(width), int(spacing), dtype=np.float64)
    ys = np.arange(0, int(height), int(spacing), dtype=np.float64)
    if xs.size == 0 or ys.size == 0:
        return []
    # 列優先（x の外側ループ）で並べる
    gx, gy = np.meshgrid(xs, ys, indexing="ij")
    n = noise.noise_points(gx * noise_scale, gy * noise_scale)
    sizes = map_range(n, 0.0, 1.0, lo, hi)
    return [
        CrossMark(float(x), float(y), float(s))
        for x, y, s in zip(gx.reshape(-1), gy.reshape(-1), np.asarray(sizes).reshape(-1))
    ]


def cross_segments(marks: Sequence[CrossMark]) -> np.ndarray:
    """十字ごとに水平・垂直の 2 線分を並べた `(2K, 2, 2)` 配列。"""
    if not marks:
        return np.empty((0, 2, 2), dtype=np.float32)
    arr = np.array([(m.x, m.y, m.size * 0.5) for m in marks], dtype=np.float32)
    x, y, h = arr[:, 0], arr[:, 1], arr[:, 2]
    seg = np.empty((arr.shape[0], 2, 2, 2), dtype=np.float32)
    seg[:, 0, 0] = np.stack([x - h, y], axis=1)
    seg[:, 0, 1] = np.stack([x + h, y], axis=1)
    seg[:, 1, 0] = np.stack([x, y - h], axis=1)
    seg[:, 1, 1] = np.stack([x, y + h], axis=1)
    return seg.reshape(-1, 2, 2)


def cross_grid(
    width: int = 600,
    height: int = 600,
    spacing: int = 10,
    noise_scale: float = 0.01,
    seed: int | None = None,
) -> Geometry:
    """ノイズでサイズが変わる十字の格子（キャンバス座標）。"""
    marks = cross_marks(width, height, spacing, noise_scale, ValueNoise(seed))
    return Geometry.from_segments(cross_segments(marks))


def cross_field(heights: np.ndarray, spacing: float, half_arm: float) -> Geometry:
    """高さマップ `(cols, rows)` の各点に X 方向と Y 方向の腕を持つ十字を置く。

    格子は XZ 平面で原点中心に配置する（列 → x, 行 → z）。
    """
    h = np.asarray(heights, dtype=np.float32)
    if h.ndim != 2:
        raise ValueError(f"heights は 2 次元配列である必要があります: {h.shape}")
    cols, rows = h.shape
    if cols == 0 or rows == 0:
        return Geometry.empty()
    xs = np.arange(cols, dtype=np.float32) * spacing - (cols - 1) * spacing / 2.0
    zs = np.arange(rows, dtype=np.float32) * spacing - (rows - 1) * spacing / 2.0
    gx, gz = np.meshgrid(xs, zs, indexing="ij")
    x, y, z = gx.reshape(-1), h.reshape(-1), gz.reshape(-1)

    seg = np.empty((x.size, 2, 2, 3), dtype=np.float32)
    seg[:, 0, 0] = np.stack([x - half_arm, y, z], axis=1)
    seg[:, 0, 1] = np.stack([x + half_arm, y, z], axis=1)
    seg[:, 1, 0] = np.stack([x, y - half_arm, z], axis=1)
    seg[:, 1, 1] = np.stack([x, y + half_arm, z], axis=1)
    return Geometry.from_segments(seg.reshape(-1, 2, 3))


__all__ = ["CrossMark", "cross_marks", "cross_segments", "cross_grid", "cross_field"]
