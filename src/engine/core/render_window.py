"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA/リサイズ可）と描画・リサイズコールバック登録を提供。
なぜ: レンダラ/スケッチ層から GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(1280, 720, caption="Noise Gallery")
    win.add_draw_callback(lambda: renderer.render(scene, camera))
    win.add_resize_callback(base.on_resize)
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet.gl import Config

logger = logging.getLogger(__name__)


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        caption: str = "Noise Gallery",
        resizable: bool = True,
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            caption: タイトル。
            resizable: リサイズ可否。
        """
        # 線描画を滑らかにするために MSAA を有効化
        config = Config(
            double_buffer=True, sample_buffers=1, samples=4, depth_size=24, vsync=True
        )
        super().__init__(
            width=width, height=height, caption=caption, resizable=resizable, config=config
        )
        self._draw_callbacks: list[Callable[[], None]] = []
        self._resize_callbacks: list[Callable[[int, int], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def add_resize_callback(self, func: Callable[[int, int], None]) -> None:
        """`on_resize` で `(width, height)`（論理ピクセル）を受け取る関数を登録する。"""
        self._resize_callbacks.append(func)

    def pixel_ratio(self) -> float:
        fb_w, _ = self.get_framebuffer_size()
        return fb_w / self.width if self.width > 0 else 1.0

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。クリアはレンダラ側で行う。"""
        for cb in self._draw_callbacks:
            cb()

    def on_resize(self, width, height):  # Pyglet 既定のイベント名
        logger.debug("window resized: %dx%d", width, height)
        for cb in self._resize_callbacks:
            cb(int(width), int(height))
        # pyglet 既定の on_resize は使わない（ビューポートはレンダラが設定する）
        return pyglet.event.EVENT_HANDLED


__all__ = ["RenderWindow"]
