"""
どこで: `api.sketch_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS・ウィンドウサイズ・線幅を「引数 > 設定ファイル > 既定値」の順で解決する。
なぜ: `api.sketch` を薄く保ち、GL なしでテストできるようにするため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.param_utils import parse_size
from util.constants import DEFAULT_CAPTION, DEFAULT_FPS, DEFAULT_WINDOW_SIZE
from util.utils import config_section

logger = logging.getLogger(__name__)


def resolve_fps(
    requested_fps: int | None,
    cfg: Mapping[str, Any] | None = None,
    *,
    default: int = DEFAULT_FPS,
) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない/<=0 は既定へ）。
    - それ以外は設定 `window.fps` を読み、失敗時は既定値。
    """
    if requested_fps is not None:
        try:
            return max(1, int(requested_fps))
        except (TypeError, ValueError):
            logger.warning("invalid fps %r; using %d", requested_fps, default)
            return max(1, int(default))
    value = config_section(cfg, "window").get("fps", default)
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        logger.warning("invalid window.fps %r in config; using %d", value, default)
        return max(1, int(default))


def resolve_window_size(
    requested: str | tuple[int, int] | None,
    sketch_size: tuple[int, int] | None = None,
    cfg: Mapping[str, Any] | None = None,
) -> tuple[int, int]:
    """ウィンドウサイズを解決する。

    優先順: 引数（"WxH" または `(w, h)`）> スケッチ既定 > 設定 `window.width/height` > 1280x720。

    例外:
        ValueError: 引数の書式が不正、または正でない場合。
    """
    if requested is not None:
        if isinstance(requested, str):
            return parse_size(requested)
        w, h = int(requested[0]), int(requested[1])
        if w <= 0 or h <= 0:
            raise ValueError(f"window size must be positive, got: {(w, h)}")
        return w, h
    if sketch_size is not None:
        return int(sketch_size[0]), int(sketch_size[1])
    wcfg = config_section(cfg, "window")
    try:
        w = int(wcfg.get("width", DEFAULT_WINDOW_SIZE[0]))
        h = int(wcfg.get("height", DEFAULT_WINDOW_SIZE[1]))
    except (TypeError, ValueError):
        logger.warning("invalid window size in config; using %dx%d", *DEFAULT_WINDOW_SIZE)
        return DEFAULT_WINDOW_SIZE
    if w <= 0 or h <= 0:
        return DEFAULT_WINDOW_SIZE
    return w, h


def resolve_line_thickness(
    requested: float | None, cfg: Mapping[str, Any] | None = None
) -> float | None:
    """既定の線幅（クリップ空間）。None なら環境設定（`NG_LINE_THICKNESS`）に任せる。"""
    if requested is not None:
        return float(requested)
    value = config_section(cfg, "renderer").get("line_thickness")
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("invalid renderer.line_thickness %r in config; ignored", value)
        return None


def resolve_caption(label: str, cfg: Mapping[str, Any] | None = None) -> str:
    base = str(config_section(cfg, "window").get("caption", DEFAULT_CAPTION))
    return f"{base} - {label}" if label else base


def button_name(buttons: int, *, left: int, right: int, middle: int) -> str | None:
    """pyglet のボタンビットを `"left"/"right"/"middle"` に変換する（左優先）。"""
    if buttons & left:
        return "left"
    if buttons & right:
        return "right"
    if buttons & middle:
        return "middle"
    return None


__all__ = [
    "DEFAULT_FPS",
    "DEFAULT_WINDOW_SIZE",
    "resolve_fps",
    "resolve_window_size",
    "resolve_line_thickness",
    "resolve_caption",
    "button_name",
]
