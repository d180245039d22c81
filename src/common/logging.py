"""
どこで: `common.logging`。
何を: ギャラリー全体で使う最小ロギング設定ヘルパ。
なぜ: 各モジュールは `logging.getLogger(__name__)` だけを使い、設定は CLI 側で 1 度だけ行うため。
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv("NG_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - `level` 未指定時は環境変数 `NG_LOG_LEVEL`（既定 INFO）を使う
    """
    lvl = _resolve_level(level)
    root = logging.getLogger()
    if root.handlers:
        # アプリ側で設定済み
        return
    logging.basicConfig(level=lvl, format=LOG_FORMAT)


__all__ = ["setup_default_logging", "LOG_FORMAT"]
