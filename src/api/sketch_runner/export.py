"""
どこで: `api.sketch_runner.export`
何を: P キーの PNG 保存ハンドラ（失敗はログに残してループは継続）。
なぜ: `api.sketch` からエクスポート関連の責務を分離するため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from engine.export.image import save_png

logger = logging.getLogger(__name__)


def make_png_handler(renderer: Any) -> Callable[[], Path | None]:
    """呼び出すたびに現在のフレームを PNG 保存する関数を返す。"""

    def _save() -> Path | None:
        try:
            path = save_png(renderer)
        except (RuntimeError, ValueError, OSError) as e:
            logger.error("PNG 保存に失敗しました: %s", e)
            return None
        return path

    return _save


__all__ = ["make_png_handler"]
