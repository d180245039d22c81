"""
どこで: `common` パッケージ。
何を: shapes/sketches 双方で使う軽量ユーティリティ（BaseRegistry など）。
なぜ: 上位層から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry

__all__ = [
    "BaseRegistry",
]
