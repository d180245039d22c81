"""
どこで: `sketches.base`。
何を: ギャラリーのスケッチ共通基底 `Sketch`（setup/update/tick・パラメータ解決・ポインタ委譲）。
なぜ: ランナーはどのスケッチも同じ手順（setup → 毎フレーム tick → render）で扱えるようにするため。

ライフサイクル:
    sk = SketchCls(params)        # 設定ファイル `sketches.<name>` の上書き値
    sk.setup(ctx)                 # scene/camera（と必要なら controls）を用意
    sk.tick(dt)                   # loop=True の間だけ update(dt) を呼ぶ
    renderer.render(sk.scene, sk.camera)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Mapping

from engine.core.scene import Scene

if TYPE_CHECKING:
    from .context import SketchContext


class Sketch(ABC):
    """1 枚のスケッチ。

    クラス属性:
        name: 登録名（`@sketch` が設定する）。
        loop: False なら setup 後に update を呼ばない（1 回だけ描く静的スケッチ）。
        size: 既定のウィンドウサイズ。None ならギャラリー既定のサイズを使う。
    """

    name: str = ""
    loop: bool = True
    size: tuple[int, int] | None = None
    defaults: Mapping[str, Any] = {}

    def __init__(self, params: Mapping[str, Any] | None = None) -> None:
        self.params: dict[str, Any] = {**self.defaults, **dict(params or {})}
        self.scene: Scene | None = None
        self.camera: Any = None
        # ポインタ入力の委譲先（on_drag/on_scroll/tick を持つもの）
        self.controls: Any = None
        self.frame_count = 0

    def param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)

    @abstractmethod
    def setup(self, ctx: "SketchContext") -> None:
        """scene と camera を構築する。"""

    def update(self, dt: float) -> None:
        """1 フレーム分の状態更新（既定は何もしない）。"""

    def tick(self, dt: float) -> None:
        if not self.loop:
            return
        self.update(dt)
        self.frame_count += 1

    def on_drag(self, dx: float, dy: float, button: str, viewport_height: float) -> None:
        if self.controls is not None:
            self.controls.on_drag(dx, dy, button, viewport_height)

    def on_scroll(self, amount: float) -> None:
        if self.controls is not None:
            self.controls.on_scroll(amount)

    def teardown(self) -> None:
        """ウィンドウ終了時の後始末（既定は何もしない）。"""

    @property
    def is_ready(self) -> bool:
        return self.scene is not None and self.camera is not None


__all__ = ["Sketch"]
