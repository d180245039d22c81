"""
どこで: `engine.export.image`。
何を: 現在の描画内容を PNG として保存するラッパ（最小実装）。
なぜ: ワンアクション（P キー）でスクリーンショットを得られるようにするため。
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from util.paths import ensure_screenshots_dir

logger = logging.getLogger(__name__)


def save_png(renderer: Any, path: Path | None = None) -> Path:
    """レンダラの既定フレームバッファを PNG として保存する。

    Parameters
    ----------
    renderer : SceneRenderer
        `read_pixels()` を持つレンダラ。
    path : Path | None
        出力先パス。None の場合は `data/screenshot/` にタイムスタンプ名で保存。

    Returns
    -------
    Path
        保存先のファイルパス。
    """
    import pyglet  # 遅延 import

    width, height, data = renderer.read_pixels()
    if width <= 0 or height <= 0:
        raise ValueError("出力解像度が不正です（width/height <= 0）")

    if path is None:
        out_dir = ensure_screenshots_dir()
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = unique_path(out_dir / f"{ts}_{width}x{height}.png")

    try:
        img = pyglet.image.ImageData(width, height, "RGBA", data, pitch=width * 4)
        img.save(str(path))
    except Exception as e:
        raise RuntimeError(f"PNG 書き出しに失敗: {e}") from e
    logger.info("screenshot saved: %s", path)
    return path


def unique_path(path: Path) -> Path:
    """既存ファイルと衝突しないよう `-1`, `-2`, ... を付けたパスを返す。"""
    if not path.exists():
        return path
    stem = path.stem
    suffix = path.suffix
    parent = path.parent
    i = 1
    while True:
        cand = parent / f"{stem}-{i}{suffix}"
        if not cand.exists():
            return cand
        i += 1


__all__ = ["save_png", "unique_path"]
