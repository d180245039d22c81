"""
どこで: `api.sketch`（実行ランナー）。
何を: 登録済みスケッチを 1 つ選び、pyglet ウィンドウ + ModernGL で描画ループを回す。
なぜ: どのスケッチも同じ手順（解決 → setup → tick → render）で起動できるようにするため。

実行フロー（概要）:
1) 設定解決: `util.utils.load_config()` からギャラリー既定・FPS・ウィンドウサイズを補完。
2) スケッチ解決: `resolve_initial_sketch()`（不正/未登録名は警告して既定へ）。
3) `init_only=True` ならここで終了（ウィンドウ/GL を作らない）。
4) ウィンドウ/GL: `RenderWindow` と `SceneRenderer` を生成。
5) スケッチ setup: 失敗時は "Failed to load sketch ..." を記録して例外を送出。
6) フレーム駆動: `SketchSession` が持つ `FrameClock([ImageLoader, sketch, controls])` を
   `pyglet.clock` で駆動。描画はウィンドウの `on_draw` から現在のスケッチの scene/camera。
7) 切り替え: ←/→ で登録順に前後のスケッチへ。setup に失敗したら前のスケッチのまま。

操作:
- 左ドラッグ: 回転 / 右・中ドラッグ: パン / ホイール: ズーム（スケッチのコントロールに委譲）
- `ESC`: 終了 / `P`: PNG 保存（`data/screenshot/`） / `←` `→`: スケッチ切り替え

例:
    from api import run_sketch
    run_sketch("cross_grid")
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from engine.core.frame_clock import FrameClock
from engine.core.tickable import Tickable
from sketches.base import Sketch
from sketches.context import SketchContext
from sketches.registry import SketchInfo, get_sketch, list_sketches, resolve_initial_sketch
from util.utils import config_section, load_config

from .sketch_runner.utils import (
    button_name,
    resolve_caption,
    resolve_fps,
    resolve_line_thickness,
    resolve_window_size,
)

logger = logging.getLogger(__name__)


def prepare_sketch(
    name: str | None,
    cfg: Mapping[str, Any] | None = None,
) -> tuple[SketchInfo, Sketch]:
    """スケッチ名を解決し、設定 `sketches.<name>` を渡してインスタンスを作る（GL 不要）。"""
    import sketches  # noqa: F401  (登録のための import)

    default = config_section(cfg, "gallery").get("default_sketch")
    resolved = resolve_initial_sketch(name, default)
    info = get_sketch(resolved)
    params = config_section(cfg, "sketches", resolved)
    logger.info("sketch: %s (%s)", info.name, info.label)
    return info, info.factory(params)


def setup_sketch(sketch_obj: Sketch, ctx: SketchContext) -> None:
    """`setup` を実行する。失敗は記録したうえで送出する。"""
    try:
        sketch_obj.setup(ctx)
    except Exception:
        logger.error("Failed to load sketch %r", sketch_obj.name, exc_info=True)
        raise
    if not sketch_obj.is_ready:
        raise RuntimeError(f"sketch {sketch_obj.name!r} did not create a scene and camera")


def frame_tickables(loader: Tickable, sketch_obj: Sketch) -> list[Tickable]:
    """1 フレームの更新順: 画像ローダ（コールバック配送）→ スケッチ → カメラ操作。"""
    tickables: list[Tickable] = [loader, sketch_obj]
    if sketch_obj.controls is not None:
        tickables.append(sketch_obj.controls)
    return tickables


class SketchSession:
    """実行中のスケッチと、その `SketchContext`・`FrameClock` をまとめて保持する。

    `switch_to()`/`cycle()` で別のスケッチへ差し替える。新しいスケッチの setup が
    失敗した場合は何も変えずに前のスケッチを動かし続ける。
    """

    def __init__(
        self,
        renderer: Any,
        loader: Tickable,
        width: int,
        height: int,
        *,
        cfg: Mapping[str, Any] | None = None,
        on_switch: Callable[[SketchInfo], None] | None = None,
    ) -> None:
        self.renderer = renderer
        self.loader = loader
        self.width = int(width)
        self.height = int(height)
        self.cfg = cfg
        self._on_switch = on_switch
        self.info: SketchInfo | None = None
        self.sketch: Sketch | None = None
        self.ctx: SketchContext | None = None
        self.clock = FrameClock([loader])
        # 最後に切り替えを試みたスケッチ名（失敗したものも含む）
        self._cursor: str | None = None

    def _setup(self, sketch_obj: Sketch) -> SketchContext:
        ctx = SketchContext(
            self.renderer, self.width, self.height, loader=self.loader, config=sketch_obj.params
        )
        setup_sketch(sketch_obj, ctx)
        return ctx

    def _activate(self, info: SketchInfo, sketch_obj: Sketch, ctx: SketchContext) -> None:
        self.info, self.sketch, self.ctx = info, sketch_obj, ctx
        self._cursor = info.name
        self.clock.set_tickables(frame_tickables(self.loader, sketch_obj))
        if self._on_switch is not None:
            self._on_switch(info)

    def start(self, info: SketchInfo, sketch_obj: Sketch) -> None:
        """最初のスケッチを setup する。失敗はそのまま送出する。"""
        self._activate(info, sketch_obj, self._setup(sketch_obj))

    def switch_to(self, name: str) -> bool:
        """`name` のスケッチへ切り替える。切り替えられたら True。"""
        self._cursor = name
        try:
            info, new_sketch = prepare_sketch(name, self.cfg)
            ctx = self._setup(new_sketch)
        except Exception:
            current = self.info.name if self.info is not None else None
            logger.warning("switch to %r failed; keeping %r", name, current)
            return False
        if self.sketch is not None:
            self.sketch.teardown()
        self._activate(info, new_sketch, ctx)
        return True

    def cycle(self, step: int) -> bool:
        """登録順で `step` 個先のスケッチへ切り替える（端は反対側へ回り込む）。"""
        names = [i.name for i in list_sketches()]
        if not names:
            return False
        origin = self._cursor if self._cursor in names else names[0]
        target = names[(names.index(origin) + step) % len(names)]
        if target == (self.info.name if self.info is not None else None):
            self._cursor = target
            return False
        return self.switch_to(target)

    def tick(self, dt: float | None = None) -> None:
        self.clock.tick(dt)

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            return
        self.width, self.height = int(width), int(height)
        if self.ctx is not None:
            self.ctx.resize(self.width, self.height)

    def render(self) -> None:
        if self.sketch is not None:
            self.renderer.render(self.sketch.scene, self.sketch.camera)

    def on_drag(self, dx: float, dy: float, button: str, viewport_height: float) -> None:
        if self.sketch is not None:
            self.sketch.on_drag(dx, dy, button, viewport_height)

    def on_scroll(self, amount: float) -> None:
        if self.sketch is not None:
            self.sketch.on_scroll(amount)

    def close(self) -> None:
        if self.sketch is not None:
            self.sketch.teardown()


def run_sketch(
    name: str | None = None,
    *,
    fps: int | None = None,
    size: str | tuple[int, int] | None = None,
    line_thickness: float | None = None,
    init_only: bool = False,
) -> None:
    """スケッチを起動し、ウィンドウが閉じられるまでブロックする。

    Parameters
    ----------
    name : str | None
        スケッチ名。None/不正/未登録なら設定 `gallery.default_sketch`。
    fps : int | None
        更新レート。None で設定 `window.fps`（なければ 60）。
    size : str | tuple[int, int] | None
        ウィンドウサイズ（"WxH" 可）。None でスケッチ既定 → 設定 → 1280x720。
    line_thickness : float | None
        既定の線幅（クリップ空間）。None で設定/環境変数。
    init_only : bool
        True で解決だけ行い、ウィンドウ/GL を作らずに戻る。
    """
    cfg = load_config()
    info, sketch_obj = prepare_sketch(name, cfg)
    fps = resolve_fps(fps, cfg)
    width, height = resolve_window_size(size, sketch_obj.size, cfg)
    thickness = resolve_line_thickness(line_thickness, cfg)

    if init_only:
        return None

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key, mouse

    from engine.io.image_loader import ImageLoader

    from .sketch_runner.export import make_png_handler
    from .sketch_runner.render import create_window_and_renderer

    rendering_window, renderer = create_window_and_renderer(
        width,
        height,
        caption=resolve_caption(info.label, cfg),
        line_thickness=thickness,
    )
    loader = ImageLoader()
    session = SketchSession(
        renderer,
        loader,
        width,
        height,
        cfg=cfg,
        on_switch=lambda i: rendering_window.set_caption(resolve_caption(i.label, cfg)),
    )
    try:
        session.start(info, sketch_obj)
    except Exception:
        loader.close()
        renderer.release()
        rendering_window.close()
        raise

    rendering_window.add_draw_callback(session.render)
    rendering_window.add_resize_callback(session.resize)

    pyglet.clock.schedule_interval(session.tick, 1 / fps)
    save_png = make_png_handler(renderer)

    @rendering_window.event
    def on_mouse_drag(x, y, dx, dy, buttons, modifiers):  # noqa: ANN001
        btn = button_name(buttons, left=mouse.LEFT, right=mouse.RIGHT, middle=mouse.MIDDLE)
        if btn is not None:
            # pyglet の dy は上向き正。コントロールは画面下向き正で受け取る
            session.on_drag(dx, -dy, btn, rendering_window.height)

    @rendering_window.event
    def on_mouse_scroll(x, y, scroll_x, scroll_y):  # noqa: ANN001
        session.on_scroll(scroll_y)

    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            rendering_window.close()
            return pyglet.event.EVENT_HANDLED
        if sym == key.P:
            save_png()
        elif sym == key.RIGHT:
            session.cycle(1)
        elif sym == key.LEFT:
            session.cycle(-1)
        return None

    @rendering_window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        setattr(on_close, "_closed", True)
        pyglet.clock.unschedule(session.tick)
        loader.close()
        session.close()
        renderer.release()
        logger.info("closed after %d frames", session.clock.frame_count)
        pyglet.app.exit()

    pyglet.app.run()


__all__ = [
    "SketchSession",
    "run_sketch",
    "prepare_sketch",
    "setup_sketch",
    "frame_tickables",
]
