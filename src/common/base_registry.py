"""
どこで: `common.base_registry`。
何を: shapes/ と sketches/ の両方で使う名前付きレジストリ基底クラス。
なぜ: 登録/取得/一覧の規則（キー正規化・重複検出・登録順保持）を一箇所にまとめるため。
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterator


class BaseRegistry:
    """名前 → オブジェクトのレジストリ。

    - 文字列キーは正規化される（大文字小文字・キャメル→スネーク・ハイフンを吸収）。
    - 列挙は登録順を保持する（ギャラリーのグループ表示順に使う）。
    """

    def __init__(self, kind: str = "entry") -> None:
        self._kind = kind
        self._registry: dict[str, Any] = {}

    @staticmethod
    def _camel_to_snake(name: str) -> str:
        s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
        s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
        return s2.lower()

    @classmethod
    def normalize_key(cls, name: str) -> str:
        """レジストリキーの正規化（例: "TerrainWave" -> "terrain_wave"）。"""
        if not isinstance(name, str):
            raise TypeError("レジストリキーは str である必要があります")
        if not name:
            raise ValueError("レジストリキーは空であってはなりません")
        name = name.replace("-", "_")
        return cls._camel_to_snake(name) if any(c.isupper() for c in name) else name.lower()

    def register(self, name: str | None = None) -> Callable[[Any], Any]:
        """クラス/関数をレジストリに登録するデコレータ。"""

        def decorator(obj: Any) -> Any:
            self.add(name or obj.__name__, obj)
            return obj

        return decorator

    def add(self, name: str, obj: Any) -> str:
        """`obj` を `name` で登録し、正規化後のキーを返す。"""
        key = self.normalize_key(name)
        if key in self._registry and self._registry[key] is not obj:
            raise ValueError(f"{self._kind} '{key}' は既に登録されています")
        self._registry[key] = obj
        return key

    def get(self, name: str) -> Any:
        """登録されたオブジェクトを取得。"""
        key = self.normalize_key(name)
        if key not in self._registry:
            raise KeyError(f"{self._kind} '{name}' は登録されていません")
        return self._registry[key]

    def list_all(self) -> list[str]:
        """登録されているすべての名前を登録順で返す。"""
        return list(self._registry.keys())

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(list(self._registry.items()))

    def is_registered(self, name: str) -> bool:
        return self.normalize_key(name) in self._registry

    def unregister(self, name: str) -> None:
        """レジストリから削除（名前が存在しない場合は無視）。"""
        self._registry.pop(self.normalize_key(name), None)

    def clear(self) -> None:
        self._registry.clear()

    @property
    def registry(self) -> dict[str, Any]:
        """レジストリのコピー（読み取り専用アクセス）。"""
        return self._registry.copy()

    def __len__(self) -> int:
        return len(self._registry)
