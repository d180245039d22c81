"""
どこで: `util.color`。
何を: 色指定の正規化/変換（Hex 文字列, 0xRRGGBB 整数, RGBA 0–1, RGBA 0–255, HSB）を一元化。
なぜ: スケッチ/レンダラ/設定ファイルで同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

import colorsys
from typing import Sequence


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> tuple[float, float, float, float]:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def hex_int_to_rgba(value: int, alpha: float = 1.0) -> tuple[float, float, float, float]:
    """`0xRRGGBB` 形式の整数を RGBA(0–1) に変換する。"""
    v = int(value)
    if v < 0 or v > 0xFFFFFF:
        raise ValueError(f"hex color int out of range: {value!r}")
    r = (v >> 16) & 0xFF
    g = (v >> 8) & 0xFF
    b = v & 0xFF
    return (r / 255.0, g / 255.0, b / 255.0, _clamp01(float(alpha)))


def hsb_to_rgba(
    h: float,
    s: float,
    b: float,
    *,
    alpha: float = 1.0,
    max_h: float = 360.0,
    max_s: float = 100.0,
    max_b: float = 100.0,
) -> tuple[float, float, float, float]:
    """HSB（既定レンジ 360/100/100）を RGBA(0–1) に変換する。"""
    hh = (float(h) / max_h) % 1.0
    ss = _clamp01(float(s) / max_s)
    bb = _clamp01(float(b) / max_b)
    r, g, bl = colorsys.hsv_to_rgb(hh, ss, bb)
    return (r, g, bl, _clamp01(float(alpha)))


def _as_sequence(value: object) -> Sequence[float | int] | None:
    if isinstance(value, (list, tuple)):
        return value  # type: ignore[return-value]
    return None


def normalize_color(value: object) -> tuple[float, float, float, float]:
    """色を RGBA(0–1) へ正規化する。

    - 受理: Hex 文字列, 0xRRGGBB 整数, (r,g,b[,a]) （0–1 または 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return hex_int_to_rgba(value)
    seq = _as_sequence(value)
    if seq is None:
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        fseq = [float(x) for x in seq]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(fseq) == 3:
        fseq.append(1.0)
    # まず 0–1 とみなし、範囲外があれば 0–255 として扱う
    if all(0.0 <= x <= 1.0 for x in fseq):
        r, g, b, a = fseq
        return (r, g, b, a)
    u8 = [max(0, min(255, int(round(x)))) for x in fseq[:3]]
    a = 1.0 if len(seq) == 3 else max(0, min(255, int(round(fseq[3])))) / 255.0
    return (u8[0] / 255.0, u8[1] / 255.0, u8[2] / 255.0, float(a))


def with_alpha(value: object, alpha: float) -> tuple[float, float, float, float]:
    """色を正規化し、アルファのみ差し替えて返す。"""
    r, g, b, _ = normalize_color(value)
    return (r, g, b, _clamp01(float(alpha)))


def to_u8_rgba(value: object) -> tuple[int, int, int, int]:
    """色を RGBA(0–255) へ変換する。"""
    r, g, b, a = normalize_color(value)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))


__all__ = [
    "parse_hex_color_str",
    "hex_int_to_rgba",
    "hsb_to_rgba",
    "normalize_color",
    "with_alpha",
    "to_u8_rgba",
]
