"""
どこで: `api.sketch_runner.render`
何を: RenderWindow と ModernGL の SceneRenderer をまとめて初期化する。
なぜ: `api.sketch` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def create_window_and_renderer(
    window_width: int,
    window_height: int,
    *,
    caption: str = "Noise Gallery",
    line_thickness: float | None = None,
) -> tuple[Any, Any]:
    """ウィンドウと SceneRenderer を生成して返す。

    Returns
    -------
    (rendering_window, renderer)
    """
    from engine.core.render_window import RenderWindow
    from engine.render.renderer import SceneRenderer

    rendering_window = RenderWindow(window_width, window_height, caption=caption)
    renderer = SceneRenderer.from_window(rendering_window, line_thickness=line_thickness)
    info = renderer.ctx.info
    logger.debug(
        "GL context: %s / %s (pixel ratio %.2f)",
        info.get("GL_RENDERER", "?"),
        info.get("GL_VERSION", "?"),
        renderer.pixel_ratio,
    )
    return rendering_window, renderer


__all__ = ["create_window_and_renderer"]
