"""
どこで: `common` の数値パラメータユーティリティ。
何を: 範囲写像（map）・クランプ・線形補間・vec3 正規化・`WxH` 文字列の解析。
なぜ: スケッチ群が共通で使う小さな数値変換を、決定的な純関数として一箇所に置くため。
"""

from __future__ import annotations

from typing import Iterable

import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x <= lo else hi if x >= hi else x


def clamp01(x: float) -> float:
    return clamp(x, 0.0, 1.0)


def map_range(x, in_lo: float, in_hi: float, out_lo: float, out_hi: float):
    """`[in_lo, in_hi]` を `[out_lo, out_hi]` へ線形に写す（クランプしない）。

    配列を渡した場合は配列で返す。
    """
    if in_hi == in_lo:
        raise ValueError("map_range: 入力範囲の幅が 0 です")
    t = (np.asarray(x, dtype=np.float64) - in_lo) / (in_hi - in_lo)
    out = out_lo + t * (out_hi - out_lo)
    return float(out) if np.ndim(out) == 0 else out


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def ensure_vec3(v: float | Iterable[float]) -> tuple[float, float, float]:
    if isinstance(v, (int, float)):
        f = float(v)
        return (f, f, f)
    t = tuple(float(x) for x in v)
    if len(t) == 1:
        return (t[0], t[0], t[0])
    if len(t) != 3:
        raise ValueError("vec3 には数値の単体、1要素タプル、または3要素タプルを指定してください")
    return (t[0], t[1], t[2])


def parse_size(text: str) -> tuple[int, int]:
    """`"800x600"` → `(800, 600)`。

    例外:
        ValueError: 形式不正、または幅/高さが正でない場合。
    """
    parts = str(text).lower().replace(" ", "").split("x")
    if len(parts) != 2:
        raise ValueError(f"サイズは WxH 形式で指定してください: {text!r}")
    w, h = int(parts[0]), int(parts[1])
    if w <= 0 or h <= 0:
        raise ValueError(f"サイズは正である必要があります: {text!r}")
    return w, h


__all__ = ["clamp", "clamp01", "map_range", "lerp", "ensure_vec3", "parse_size"]
