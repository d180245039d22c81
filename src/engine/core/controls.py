"""
どこで: `engine.core.controls`。
何を: ターゲット周りを球面座標で周回するオービットコントロール（減衰・距離/極角制限付き）。
なぜ: ポインタ入力からカメラ姿勢への変換をウィンドウ実装から切り離し、純粋に検証できるようにするため。

球面座標:
- `radius`: ターゲットからの距離
- `phi`: +Y 軸からの極角（0 が真上、π/2 が水平）
- `theta`: Y 軸周りの方位角（+Z 方向が 0）
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from .camera import PerspectiveCamera


_EPS = 1e-6


class OrbitControls:
    """ポインタドラッグ（回転/パン）とスクロール（ドリー）でカメラを動かす。

    入力は `rotate_left/rotate_up/dolly/pan` に蓄積され、`update()` で 1 フレーム分適用される。
    減衰有効時は蓄積量の `damping_factor` 倍だけ適用し、残りを `1 - damping_factor` 倍に減らす。
    """

    def __init__(
        self,
        camera: PerspectiveCamera,
        *,
        target: tuple[float, float, float] = (0.0, 0.0, 0.0),
        enable_damping: bool = True,
        damping_factor: float = 0.05,
        min_distance: float = 0.0,
        max_distance: float = math.inf,
        min_polar_angle: float = 0.0,
        max_polar_angle: float = math.pi,
        rotate_speed: float = 1.0,
        zoom_speed: float = 1.0,
        pan_speed: float = 1.0,
        enabled: bool = True,
    ) -> None:
        self.camera = camera
        self.target = np.array(target, dtype=np.float64)
        self.enable_damping = bool(enable_damping)
        self.damping_factor = float(damping_factor)
        self.min_distance = float(min_distance)
        self.max_distance = float(max_distance)
        self.min_polar_angle = float(min_polar_angle)
        self.max_polar_angle = float(max_polar_angle)
        self.rotate_speed = float(rotate_speed)
        self.zoom_speed = float(zoom_speed)
        self.pan_speed = float(pan_speed)
        self.enabled = bool(enabled)

        self._delta_theta = 0.0
        self._delta_phi = 0.0
        self._scale = 1.0
        self._pan_offset = np.zeros(3, dtype=np.float64)
        self.camera.target = self.target.copy()

    # ---- 入力 ----
    def rotate_left(self, angle: float) -> None:
        self._delta_theta -= angle

    def rotate_up(self, angle: float) -> None:
        self._delta_phi -= angle

    def dolly(self, scale: float) -> None:
        """`scale > 1` で遠ざかり、`< 1` で近づく。"""
        if scale <= 0:
            raise ValueError(f"dolly scale は正である必要があります: {scale}")
        self._scale *= scale

    def pan(self, dx: float, dy: float, viewport_height: float) -> None:
        """画面上の移動量（px）をカメラ平面上の移動に変換して蓄積する。"""
        if viewport_height <= 0:
            return
        offset = self.camera.position - self.target
        distance = float(np.linalg.norm(offset))
        distance *= math.tan(math.radians(self.camera.fov / 2.0))
        view = self.camera.view_matrix
        right = view[0, :3]
        up = view[1, :3]
        self._pan_offset += (-2.0 * dx * distance / viewport_height) * self.pan_speed * right
        self._pan_offset += (2.0 * dy * distance / viewport_height) * self.pan_speed * up

    # ---- ポインタイベント（ウィンドウから委譲） ----
    def on_drag(self, dx: float, dy: float, button: str, viewport_height: float) -> None:
        """ドラッグ量（px）を回転/パンに変換する。`dy` は画面下向きを正とする。"""
        if not self.enabled or viewport_height <= 0:
            return
        if button == "left":
            self.rotate_left(2.0 * math.pi * dx / viewport_height * self.rotate_speed)
            self.rotate_up(2.0 * math.pi * dy / viewport_height * self.rotate_speed)
        elif button in ("right", "middle"):
            self.pan(dx, dy, viewport_height)

    def on_scroll(self, amount: float) -> None:
        """スクロール量（上向き正）でドリーする。"""
        if not self.enabled or amount == 0:
            return
        step = 0.95**self.zoom_speed
        if amount > 0:
            self.dolly(step ** abs(amount))
        else:
            self.dolly((1.0 / step) ** abs(amount))

    # ---- 状態 ----
    def spherical(self) -> tuple[float, float, float]:
        """現在の `(radius, phi, theta)` を返す。"""
        offset = self.camera.position - self.target
        radius = float(np.linalg.norm(offset))
        if radius == 0:
            return 0.0, 0.0, 0.0
        phi = math.acos(max(-1.0, min(1.0, offset[1] / radius)))
        theta = math.atan2(offset[0], offset[2])
        return radius, phi, theta

    def distance(self) -> float:
        return float(np.linalg.norm(self.camera.position - self.target))

    def tick(self, dt: float) -> None:
        self.update()

    def update(self) -> bool:
        """蓄積入力を 1 フレーム分適用してカメラ位置を更新する。

        Returns
        -------
        bool
            カメラ位置が変化した場合 True。
        """
        radius, phi, theta = self.spherical()
        if self.enable_damping:
            theta += self._delta_theta * self.damping_factor
            phi += self._delta_phi * self.damping_factor
        else:
            theta += self._delta_theta
            phi += self._delta_phi

        phi = max(self.min_polar_angle, min(self.max_polar_angle, phi))
        phi = max(_EPS, min(math.pi - _EPS, phi))

        radius *= self._scale
        radius = max(self.min_distance, min(self.max_distance, radius))

        if self.enable_damping:
            self.target += self._pan_offset * self.damping_factor
        else:
            self.target += self._pan_offset

        offset = np.array(
            [
                radius * math.sin(phi) * math.sin(theta),
                radius * math.cos(phi),
                radius * math.sin(phi) * math.cos(theta),
            ],
            dtype=np.float64,
        )
        old_position = self.camera.position.copy()
        self.camera.position = self.target + offset
        self.camera.target = self.target.copy()

        if self.enable_damping:
            self._delta_theta *= 1.0 - self.damping_factor
            self._delta_phi *= 1.0 - self.damping_factor
            self._pan_offset *= 1.0 - self.damping_factor
        else:
            self._delta_theta = 0.0
            self._delta_phi = 0.0
            self._pan_offset[:] = 0.0
        self._scale = 1.0

        moved = float(np.sum((old_position - self.camera.position) ** 2))
        return moved > _EPS


class EasedOrbit:
    """目標角へ毎フレーム補間して近づく周回カメラ（十字地形用）。

    ドラッグで目標角 `target_theta/target_phi` を動かし、`update()` で
    `theta/phi` を `easing` の割合だけ目標へ寄せる。`phi` は `[min_phi, max_phi]` に制限。
    位置は `(r cosθ sinφ, r cosφ, r sinθ sinφ)`。
    """

    def __init__(
        self,
        camera: Any,
        *,
        radius: float = 900.0,
        theta: float = 0.0,
        phi: float = math.pi / 3,
        min_phi: float = math.pi / 12,
        max_phi: float = math.pi / 2.5,
        easing: float = 0.1,
        drag_speed: float = 0.01,
    ) -> None:
        if min_phi > max_phi:
            raise ValueError(f"min_phi <= max_phi である必要があります: {min_phi}, {max_phi}")
        self.camera = camera
        self.radius = float(radius)
        self.min_phi = float(min_phi)
        self.max_phi = float(max_phi)
        self.easing = float(easing)
        self.drag_speed = float(drag_speed)
        self.theta = float(theta)
        self.phi = self._clamp_phi(float(phi))
        self.target_theta = self.theta
        self.target_phi = self.phi
        self._apply()

    def _clamp_phi(self, phi: float) -> float:
        return max(self.min_phi, min(self.max_phi, phi))

    def on_drag(self, dx: float, dy: float, button: str, viewport_height: float) -> None:
        """左ドラッグで目標角を動かす。`dy` は画面下向きを正とする。"""
        if button != "left":
            return
        self.target_theta -= dx * self.drag_speed
        self.target_phi = self._clamp_phi(self.target_phi + dy * self.drag_speed)

    def on_scroll(self, amount: float) -> None:
        """ホイールは無視する（半径固定の周回でズームはしない）。"""

    def position(self) -> tuple[float, float, float]:
        r, th, ph = self.radius, self.theta, self.phi
        return (
            r * math.cos(th) * math.sin(ph),
            r * math.cos(ph),
            r * math.sin(th) * math.sin(ph),
        )

    def _apply(self) -> None:
        self.camera.set_position(*self.position())

    def tick(self, dt: float) -> None:
        self.update()

    def update(self) -> None:
        self.theta += (self.target_theta - self.theta) * self.easing
        self.phi += (self.target_phi - self.phi) * self.easing
        self._apply()


__all__ = ["OrbitControls", "EasedOrbit"]
