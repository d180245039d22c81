"""
どこで: `engine.core.camera`。
何を: 透視カメラ（3D スケッチ）とピクセル座標の正射影カメラ（2D スケッチ）。
なぜ: 投影/ビュー行列の計算をレンダラから切り離し、ヘッドレスでも検証できるようにするため。
"""

from __future__ import annotations

import numpy as np

from common.types import Vec3

from .transforms import identity, look_at, orthographic, perspective


class PerspectiveCamera:
    """垂直画角・アスペクト比・near/far を持つ透視カメラ。

    `aspect` などを変更した後は `update_projection_matrix()` を呼ぶこと
    （`projection_matrix` はキャッシュ値）。
    """

    def __init__(
        self,
        fov: float = 60.0,
        aspect: float = 1.0,
        near: float = 1.0,
        far: float = 1000.0,
        *,
        position: Vec3 = (0.0, 0.0, 0.0),
        target: Vec3 = (0.0, 0.0, 0.0),
        up: Vec3 = (0.0, 1.0, 0.0),
    ) -> None:
        self.fov = float(fov)
        self.aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.position = np.array(position, dtype=np.float64)
        self.target = np.array(target, dtype=np.float64)
        self.up = np.array(up, dtype=np.float64)
        self.projection_matrix = perspective(self.fov, self.aspect, self.near, self.far)

    def update_projection_matrix(self) -> None:
        self.projection_matrix = perspective(self.fov, self.aspect, self.near, self.far)

    def set_aspect(self, width: float, height: float) -> None:
        """ビューポートサイズからアスペクト比を更新し、投影行列を作り直す。"""
        if height <= 0:
            return
        self.aspect = float(width) / float(height)
        self.update_projection_matrix()

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position = np.array((x, y, z), dtype=np.float64)

    def look_at(self, x: float, y: float, z: float) -> None:
        self.target = np.array((x, y, z), dtype=np.float64)

    @property
    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.target, self.up)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        p = tuple(round(float(v), 3) for v in self.position)
        return f"PerspectiveCamera(fov={self.fov}, aspect={self.aspect:.3f}, position={p})"


class OrthographicCamera:
    """キャンバス座標（原点左上・Y 下向き・単位ピクセル）の正射影カメラ。"""

    def __init__(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self.projection_matrix = self._build()

    def _build(self) -> np.ndarray:
        return orthographic(0.0, self.width, self.height, 0.0, -1000.0, 1000.0)

    def set_size(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self.projection_matrix = self._build()

    @property
    def view_matrix(self) -> np.ndarray:
        return identity()


class CenteredOrthographicCamera:
    """原点中心（`-w/2..w/2` × `-h/2..h/2`）の正射影 + 注視点カメラ。

    奥行きを広く取り、周回カメラで地形を斜めから見下ろす用途に使う。
    """

    def __init__(
        self,
        width: float,
        height: float,
        *,
        near: float = -10000.0,
        far: float = 10000.0,
        position: Vec3 = (0.0, 0.0, 1.0),
        target: Vec3 = (0.0, 0.0, 0.0),
        up: Vec3 = (0.0, 1.0, 0.0),
    ) -> None:
        self.width = float(width)
        self.height = float(height)
        self.near = float(near)
        self.far = float(far)
        self.position = np.array(position, dtype=np.float64)
        self.target = np.array(target, dtype=np.float64)
        self.up = np.array(up, dtype=np.float64)
        self.projection_matrix = self._build()

    def _build(self) -> np.ndarray:
        hw = self.width / 2.0
        hh = self.height / 2.0
        return orthographic(-hw, hw, -hh, hh, self.near, self.far)

    def set_size(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self.projection_matrix = self._build()

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position = np.array((x, y, z), dtype=np.float64)

    @property
    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.target, self.up)


Camera = PerspectiveCamera | OrthographicCamera | CenteredOrthographicCamera

__all__ = ["PerspectiveCamera", "OrthographicCamera", "CenteredOrthographicCamera", "Camera"]
