"""
どこで: `sketches.registry`。
何を: `@sketch` デコレータでスケッチクラスを名前/ラベル/グループ付きで登録し、一覧・解決を提供。
なぜ: ギャラリー（CLI/ランチャ）がスケッチを名前で選び、グループ単位で並べられるようにするため。

規則:
- 名前は `^[a-z][a-z0-9_]*$`。登録順を保持する（グループ内の表示順）。
- 起動時の選択は `resolve_initial_sketch()`:
  要求名が妥当かつ登録済みならそれを、そうでなければ既定スケッチを返す（警告ログ）。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable

from common.base_registry import BaseRegistry
from util import constants

logger = logging.getLogger(__name__)

SKETCH_NAME_PATTERN = re.compile(constants.SKETCH_NAME_PATTERN)
DEFAULT_SKETCH = constants.DEFAULT_SKETCH


@dataclass(frozen=True)
class SketchInfo:
    """登録済みスケッチのメタ情報。`factory(params)` でインスタンスを生成する。"""

    name: str
    label: str
    group: str
    factory: Callable[..., Any]


_sketch_registry = BaseRegistry(kind="sketch")


def sketch(name: str, *, label: str | None = None, group: str = "misc"):
    """スケッチクラスを登録するデコレータ。

    使用例:
        @sketch("terrain_wave", label="Noise terrain", group="3D")
        class TerrainWave(Sketch): ...

    例外:
        ValueError: 名前が規則に合わない、または既に登録されている場合。
    """
    if not is_valid_sketch_name(name):
        raise ValueError(f"スケッチ名が不正です: {name!r}")

    def decorator(cls: Any) -> Any:
        info = SketchInfo(name=name, label=label or name, group=group, factory=cls)
        _sketch_registry.add(name, info)
        cls.name = name
        return cls

    return decorator


def is_valid_sketch_name(name: object) -> bool:
    return isinstance(name, str) and SKETCH_NAME_PATTERN.match(name) is not None


def get_sketch(name: str) -> SketchInfo:
    """登録済みスケッチ情報を返す。

    例外:
        KeyError: 未登録の場合。
    """
    return _sketch_registry.get(name)


def is_sketch_registered(name: str) -> bool:
    return is_valid_sketch_name(name) and _sketch_registry.is_registered(name)


def list_sketches() -> list[SketchInfo]:
    """全スケッチを登録順で返す。"""
    return [info for _, info in _sketch_registry.items()]


def grouped_sketches() -> dict[str, list[SketchInfo]]:
    """グループ名 → スケッチ一覧。グループもスケッチも登録順に並ぶ。"""
    groups: dict[str, list[SketchInfo]] = {}
    for info in list_sketches():
        groups.setdefault(info.group, []).append(info)
    return groups


def resolve_initial_sketch(requested: str | None, default: str | None = None) -> str:
    """起動時に表示するスケッチ名を決める。

    - `requested` が妥当な名前で登録済みならそれを返す。
    - それ以外（未指定を除く）は警告を出して `default` を返す。
    - `default` 自体が未登録なら登録順で最初のスケッチにフォールバックする。

    例外:
        LookupError: スケッチが 1 つも登録されていない場合。
    """
    fallback = default or DEFAULT_SKETCH
    if not is_sketch_registered(fallback):
        registered = _sketch_registry.list_all()
        if not registered:
            raise LookupError("登録済みのスケッチがありません")
        logger.warning("default sketch %r is not registered; using %r", fallback, registered[0])
        fallback = registered[0]

    if requested is None or requested == "":
        return fallback
    if is_sketch_registered(requested):
        return requested
    logger.warning("unknown sketch %r; falling back to %r", requested, fallback)
    return fallback


__all__ = [
    "SKETCH_NAME_PATTERN",
    "DEFAULT_SKETCH",
    "SketchInfo",
    "sketch",
    "is_valid_sketch_name",
    "get_sketch",
    "is_sketch_registered",
    "list_sketches",
    "grouped_sketches",
    "resolve_initial_sketch",
]
