"""
どこで: `sketches.context`。
何を: スケッチへ渡す実行コンテキスト（描画面サイズ・レンダラ・画像ローダ・設定・リサイズ通知）。
なぜ: スケッチがウィンドウや GL を直接触らずに、土台の構築と非同期読み込みを依頼できるようにするため。

提供するもの:
- `init_base_scene()`: 3D 用の共通土台（BaseScene）を作り、リサイズ通知に登録する。
- `init_canvas()`: 2D 用のキャンバス（Scene + ピクセル座標の正射影カメラ）。
- `load_image()`: ImageLoader 経由の非同期読み込み（コールバックはメインスレッド）。
- `stroke_thickness()`: キャンバス上の線幅 [px] をクリップ空間の太さへ換算。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

from engine.core.base_scene import BaseScene
from engine.core.camera import OrthographicCamera
from engine.core.scene import Scene
from util.paths import resolve_asset_path

logger = logging.getLogger(__name__)

ResizeHandler = Callable[[int, int], None]


class SketchContext:
    """1 スケッチ分の実行環境。"""

    def __init__(
        self,
        renderer: Any,
        width: int,
        height: int,
        *,
        loader: Any = None,
        config: Mapping[str, Any] | None = None,
    ) -> None:
        self.renderer = renderer
        self.width = int(width)
        self.height = int(height)
        self.loader = loader
        self.config: dict[str, Any] = dict(config or {})
        self._resize_handlers: list[ResizeHandler] = []

    # ---- リサイズ ----
    def add_resize_handler(self, handler: ResizeHandler) -> None:
        self._resize_handlers.append(handler)

    def resize(self, width: int, height: int) -> None:
        """描画面サイズ変更を通知する（0 以下は最小化中として無視）。"""
        if width <= 0 or height <= 0:
            return
        self.width = int(width)
        self.height = int(height)
        self.renderer.set_size(self.width, self.height)
        for handler in self._resize_handlers:
            handler(self.width, self.height)

    # ---- 土台 ----
    def init_base_scene(self, **overrides: Any) -> BaseScene:
        base = BaseScene(self.renderer, self.width, self.height, **overrides)
        self.add_resize_handler(base.on_resize)
        return base

    def init_canvas(
        self,
        width: float | None = None,
        height: float | None = None,
        *,
        background: object = (1.0, 1.0, 1.0, 1.0),
    ) -> tuple[Scene, OrthographicCamera]:
        """固定サイズの 2D キャンバス。省略時は現在の描画面サイズ。

        キャンバスはウィンドウ全面に引き伸ばして表示する（リサイズで座標系は変えない）。
        """
        cw = float(width) if width is not None else float(self.width)
        ch = float(height) if height is not None else float(self.height)
        self.renderer.set_size(self.width, self.height)
        return Scene(background=background), OrthographicCamera(cw, ch)

    # ---- 画像 ----
    def load_image(
        self,
        path: str | Path,
        on_success: Callable[[Any], None],
        on_failure: Callable[[Path, BaseException], None] | None = None,
    ) -> Path:
        """画像の非同期読み込みを依頼し、解決済みのパスを返す。

        例外:
            RuntimeError: ローダが用意されていない場合。
        """
        if self.loader is None:
            raise RuntimeError("このコンテキストには画像ローダがありません")
        resolved = resolve_asset_path(path)
        self.loader.load(resolved, on_success, on_failure)
        return resolved

    # ---- 線幅 ----
    def stroke_thickness(self, weight: float, canvas_height: float | None = None) -> float:
        """キャンバス高さ基準の線幅 [px] をクリップ空間（-1..1）の太さに換算する。"""
        h = float(canvas_height) if canvas_height is not None else float(self.height)
        if h <= 0:
            raise ValueError(f"canvas_height は正である必要があります: {h}")
        return 2.0 * float(weight) / h


__all__ = ["SketchContext"]
