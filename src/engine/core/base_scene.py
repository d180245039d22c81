"""
どこで: `engine.core.base_scene`。
何を: 3D スケッチ共通の土台（シーン・透視カメラ・レンダラ・環境光/平行光・オービット操作・リサイズ処理）を構築。
なぜ: 複数のスケッチで同じ初期化を繰り返さず、アクセサ経由で自前のオブジェクトを足すだけにするため。

使用例:
    base = BaseScene(ctx.renderer, ctx.width, ctx.height)
    base.get_camera().set_position(0, 80, 160)
    base.get_scene().add(MeshObject(GridMesh(200, 200, 50, 50)))
    ctx.add_resize_handler(base.on_resize)
"""

from __future__ import annotations

import logging
import math
from typing import Any, Protocol

from .camera import PerspectiveCamera
from .controls import OrbitControls
from .scene import AmbientLight, DirectionalLight, Scene

logger = logging.getLogger(__name__)


class SceneRenderer(Protocol):
    """BaseScene が要求するレンダラの最小インターフェース。"""

    def set_size(self, width: int, height: int) -> None: ...

    def render(self, scene: Scene, camera: Any) -> None: ...


class BaseScene:
    """シーン/カメラ/レンダラ/コントロール一式。

    既定値はスケッチ集の共通初期化に合わせている:
    背景 `0x333333`、`fov=60, near=1, far=1000`、カメラ `(0, 100, 200)`、
    減衰 0.05・距離 50..600・極角上限 π/2 のオービット操作、
    環境光 `0x404040` と平行光 `0xffffff`（強度 1, 方向 (1,1,1) 正規化）。
    """

    def __init__(
        self,
        renderer: SceneRenderer,
        width: int,
        height: int,
        *,
        background: object = 0x333333,
        fov: float = 60.0,
        near: float = 1.0,
        far: float = 1000.0,
        camera_position: tuple[float, float, float] = (0.0, 100.0, 200.0),
        damping_factor: float = 0.05,
        min_distance: float = 50.0,
        max_distance: float = 600.0,
        max_polar_angle: float = math.pi / 2,
        ambient_color: object = 0x404040,
        light_color: object = 0xFFFFFF,
        light_intensity: float = 1.0,
        light_direction: tuple[float, float, float] = (1.0, 1.0, 1.0),
    ) -> None:
        w, h = int(width), int(height)
        self._scene = Scene(background=background)

        self._renderer = renderer
        self._renderer.set_size(w, h)

        self._camera = PerspectiveCamera(fov, w / h if h > 0 else 1.0, near, far)
        self._camera.set_position(*camera_position)

        self._controls = OrbitControls(
            self._camera,
            enable_damping=True,
            damping_factor=damping_factor,
            min_distance=min_distance,
            max_distance=max_distance,
            max_polar_angle=max_polar_angle,
        )

        self._scene.add_light(AmbientLight(color=ambient_color))
        self._scene.add_light(
            DirectionalLight(color=light_color, intensity=light_intensity, position=light_direction)
        )
        self.width = w
        self.height = h
        logger.debug("base scene initialised: %dx%d", w, h)

    # ---- accessors ----
    def get_scene(self) -> Scene:
        return self._scene

    def get_camera(self) -> PerspectiveCamera:
        return self._camera

    def get_renderer(self) -> SceneRenderer:
        return self._renderer

    def get_controls(self) -> OrbitControls:
        return self._controls

    # ---- events ----
    def on_resize(self, width: int, height: int) -> None:
        """ビューポート変更時にアスペクト比と描画面サイズを同期する。"""
        if width <= 0 or height <= 0:
            return
        self.width = int(width)
        self.height = int(height)
        self._camera.set_aspect(self.width, self.height)
        self._renderer.set_size(self.width, self.height)


__all__ = ["BaseScene", "SceneRenderer"]
