"""
どこで: `shapes.isolines`。
何を: スカラー場（行 = y, 列 = x）から閾値ごとの等値線を marching squares で線分化。
なぜ: ノイズ場の等高線パターンを、描画と独立した純関数として生成・検証するため。

規則:
- セル 4 隅（左上・右上・左下・右下）を `value > threshold` で 0/1 に分類。
- 分類が食い違う辺で線形補間（両端の値差が 1e-5 未満なら辺の中点）。
- 交点 2 個なら 1 本、4 個なら 上→右 / 下→左 の 2 本を引く。0 個は何も描かない。
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from effects.noise import ValueNoise
from engine.core.geometry import Geometry

_EDGE_EPS = 1e-5


@njit(cache=True)
def _lerp_edge(va, vb, start, end, threshold):
    denom = vb - va
    if abs(denom) < _EDGE_EPS:
        return (start + end) / 2.0
    frac = (threshold - va) / denom
    return start + frac * (end - start)


@njit(cache=True)
def _march(field, threshold, cell_w, cell_h):
    rows = field.shape[0]
    cols = field.shape[1]
    n_cells = max(rows - 1, 0) * max(cols - 1, 0)
    out = np.empty((n_cells * 2, 2, 2), dtype=np.float32)
    count = 0
    px = np.empty(4, dtype=np.float64)
    py = np.empty(4, dtype=np.float64)
    for y in range(rows - 1):
        for x in range(cols - 1):
            tlv = field[y, x]
            trv = field[y, x + 1]
            blv = field[y + 1, x]
            brv = field[y + 1, x + 1]
            tl = tlv > threshold
            tr = trv > threshold
            bl = blv > threshold
            br = brv > threshold

            x0 = x * cell_w
            x1 = (x + 1) * cell_w
            y0 = y * cell_h
            y1 = (y + 1) * cell_h

            # 交点は 上 → 右 → 下 → 左 の順で集める
            k = 0
            if tl != tr:
                px[k] = _lerp_edge(tlv, trv, x0, x1, threshold)
                py[k] = y0
                k += 1
            if tr != br:
                px[k] = x1
                py[k] = _lerp_edge(trv, brv, y0, y1, threshold)
                k += 1
            if bl != br:
                px[k] = _lerp_edge(blv, brv, x0, x1, threshold)
                py[k] = y1
                k += 1
            if tl != bl:
                px[k] = x0
                py[k] = _lerp_edge(tlv, blv, y0, y1, threshold)
                k += 1

            if k == 2:
                out[count, 0, 0] = px[0]
                out[count, 0, 1] = py[0]
                out[count, 1, 0] = px[1]
                out[count, 1, 1] = py[1]
                count += 1
            elif k == 4:
                # 上→右 と 下→左
                out[count, 0, 0] = px[0]
                out[count, 0, 1] = py[0]
                out[count, 1, 0] = px[1]
                out[count, 1, 1] = py[1]
                out[count + 1, 0, 0] = px[2]
                out[count + 1, 0, 1] = py[2]
                out[count + 1, 1, 0] = px[3]
                out[count + 1, 1, 1] = py[3]
                count += 2
    return out[:count]


def isoline_segments(
    field: np.ndarray,
    threshold: float,
    cell_size: tuple[float, float] = (1.0, 1.0),
) -> np.ndarray:
    """1 つの閾値に対する等値線の線分 `(K, 2, 2)` float32（キャンバス座標）。

    引数:
        field: `(rows, cols)` のスカラー場。
        threshold: 閾値。
        cell_size: セル 1 個の `(幅, 高さ)`。
    """
    f = np.asarray(field, dtype=np.float64)
    if f.ndim != 2:
        raise ValueError(f"field は 2 次元配列である必要があります: {f.shape}")
    return _march(np.ascontiguousarray(f), float(threshold), float(cell_size[0]), float(cell_size[1]))


def noise_field(
    noise: ValueNoise, cols: int = 90, rows: int = 90, scale: float = 0.05, amplitude: float = 255.0
) -> np.ndarray:
    """`noise(x*scale, y*scale) * amplitude` を並べた `(rows, cols)` の場。"""
    return noise.noise_grid(
        np.arange(int(cols), dtype=np.float64) * scale,
        np.arange(int(rows), dtype=np.float64) * scale,
    ) * amplitude


def isolines(
    width: float = 800.0,
    height: float = 800.0,
    cols: int = 90,
    rows: int = 90,
    scale: float = 0.05,
    levels: Iterable[float] = (50.0, 100.0, 150.0, 200.0),
    seed: int | None = None,
) -> Geometry:
    """ノイズ場の等値線（全レベル分）をキャンバス座標で返す。"""
    field = noise_field(ValueNoise(seed), cols, rows, scale)
    cell = (float(width) / int(cols), float(height) / int(rows))
    parts = [isoline_segments(field, float(level), cell) for level in levels]
    if not parts:
        return Geometry.empty()
    return Geometry.from_segments(np.concatenate(parts, axis=0))


__all__ = ["isoline_segments", "noise_field", "isolines"]
