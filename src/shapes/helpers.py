"""
どこで: `shapes.helpers`。
何を: 3D シーンの補助線（XZ 平面の格子・座標軸）を Geometry として生成。
なぜ: 静的地形スケッチで空間の向きと縮尺を示すため。
"""

from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry


def _grid_lines(size: float, divisions: int) -> tuple[np.ndarray, np.ndarray]:
    """格子線分を中心線とそれ以外に分けて返す（各 `(K, 2, 3)`）。"""
    if int(divisions) < 1:
        raise ValueError(f"divisions は 1 以上である必要があります: {divisions}")
    n = int(divisions)
    half = size / 2.0
    ks = -half + np.arange(n + 1, dtype=np.float64) * (size / n)

    seg = np.zeros((n + 1, 2, 2, 3), dtype=np.float32)
    # z = k の X 方向の線
    seg[:, 0, 0, 0] = -half
    seg[:, 0, 1, 0] = half
    seg[:, 0, :, 2] = ks[:, None]
    # x = k の Z 方向の線
    seg[:, 1, :, 0] = ks[:, None]
    seg[:, 1, 0, 2] = -half
    seg[:, 1, 1, 2] = half

    center = np.zeros(n + 1, dtype=bool)
    if n % 2 == 0:
        center[n // 2] = True
    return seg[center].reshape(-1, 2, 3), seg[~center].reshape(-1, 2, 3)


def grid_helper_parts(size: float = 1000.0, divisions: int = 50) -> tuple[Geometry, Geometry]:
    """`(中心線, その他の線)` を別々の Geometry で返す（色分け描画用）。"""
    center, rest = _grid_lines(size, divisions)
    return Geometry.from_segments(center), Geometry.from_segments(rest)


def axes_helper(size: float = 100.0) -> tuple[Geometry, Geometry, Geometry]:
    """原点から +X/+Y/+Z へ伸びる 3 本の軸（それぞれ単独の Geometry）。"""
    axes = []
    for i in range(3):
        end = [0.0, 0.0, 0.0]
        end[i] = float(size)
        axes.append(Geometry.from_lines([[(0.0, 0.0, 0.0), tuple(end)]]))
    return axes[0], axes[1], axes[2]


__all__ = ["grid_helper_parts", "axes_helper"]
