"""
どこで: `shapes.contours`。
何を: XZ 平面上の同心円の半径列・円の頂点列・半径ごとの不透明度を生成。
なぜ: 等高線オーバーレイの形状規則をシーン構築から分けて単体で検証するため。
"""

from __future__ import annotations

import math

import numpy as np

# 半径がこの値未満の円は半透明で描く
INNER_OPACITY = 0.5
OUTER_OPACITY = 1.0


def contour_radii(start: float = 0.5, stop: float = 2.5, step: float = 0.5) -> np.ndarray:
    """`start` から `stop` まで（両端含む）`step` 刻みの半径列。

    浮動小数の累積誤差を避けるため `start + i * step` で生成する。
    """
    if step <= 0:
        raise ValueError(f"step は正である必要があります: {step}")
    if stop < start:
        return np.empty(0, dtype=np.float64)
    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    return start + np.arange(count, dtype=np.float64) * step


def circle_xz(radius: float, segments: int = 32) -> np.ndarray:
    """XZ 平面（y=0）上の閉じた円 `(segments + 1, 3)`。始点と終点は一致する。"""
    if int(segments) < 3:
        raise ValueError(f"segments は 3 以上である必要があります: {segments}")
    theta = np.linspace(0.0, 2.0 * np.pi, int(segments) + 1)
    pts = np.zeros((theta.size, 3), dtype=np.float32)
    pts[:, 0] = radius * np.cos(theta)
    pts[:, 2] = radius * np.sin(theta)
    pts[-1] = pts[0]
    return pts


def contour_opacity(radius: float, outer_radius: float) -> float:
    """外周の円だけ不透明、それ以外は半透明。"""
    return INNER_OPACITY if radius < outer_radius else OUTER_OPACITY


__all__ = [
    "INNER_OPACITY",
    "OUTER_OPACITY",
    "contour_radii",
    "circle_xz",
    "contour_opacity",
]
