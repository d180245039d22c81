"""
どこで: `engine.core.transforms`。
何を: 4x4 同次変換行列（透視/正射影・look-at・オイラー回転・TRS 合成）の純関数群。
なぜ: カメラ/シーングラフ/レンダラで同じ行列規約を共有するため。

規約:
- 行列は列ベクトル規約（`p' = M @ p`）の float64 (4,4)。
- GPU へ渡す際は `to_gl()` で転置した float32（列優先）にする。
- 回転は Geometry.rotate と同じく X→Y→Z の順に適用（`R = Rz @ Ry @ Rx`）。
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from common.types import Vec3


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def perspective(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL 互換の透視投影行列（垂直画角 `fov_deg` 度）。"""
    if aspect <= 0:
        raise ValueError(f"aspect は正である必要があります: {aspect}")
    if near <= 0 or far <= near:
        raise ValueError(f"near/far が不正です: near={near}, far={far}")
    f = 1.0 / math.tan(math.radians(fov_deg) / 2.0)
    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2.0 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


def orthographic(
    left: float, right: float, bottom: float, top: float, near: float = -1.0, far: float = 1.0
) -> np.ndarray:
    """正射影行列。`top < bottom` を渡せば Y 下向き（ピクセル座標）になる。"""
    m = np.eye(4, dtype=np.float64)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def look_at(eye: Sequence[float], target: Sequence[float], up: Sequence[float] = (0, 1, 0)) -> np.ndarray:
    """ビュー行列（ワールド → カメラ）。"""
    e = np.asarray(eye, dtype=np.float64)
    t = np.asarray(target, dtype=np.float64)
    u = np.asarray(up, dtype=np.float64)
    fwd = t - e
    n = np.linalg.norm(fwd)
    if n == 0:
        raise ValueError("eye と target が同一点です")
    fwd /= n
    side = np.cross(fwd, u)
    sn = np.linalg.norm(side)
    if sn < 1e-12:
        # 真上/真下を向く場合は別の up を使う
        side = np.cross(fwd, np.array([0.0, 0.0, -1.0]))
        sn = np.linalg.norm(side)
    side /= sn
    true_up = np.cross(side, fwd)
    m = np.eye(4, dtype=np.float64)
    m[0, :3] = side
    m[1, :3] = true_up
    m[2, :3] = -fwd
    m[0, 3] = -side @ e
    m[1, 3] = -true_up @ e
    m[2, 3] = fwd @ e
    return m


def rotation_xyz(rx: float, ry: float, rz: float) -> np.ndarray:
    """X→Y→Z の順に適用する回転行列。"""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    mx = np.array([[1, 0, 0, 0], [0, cx, -sx, 0], [0, sx, cx, 0], [0, 0, 0, 1]], dtype=np.float64)
    my = np.array([[cy, 0, sy, 0], [0, 1, 0, 0], [-sy, 0, cy, 0], [0, 0, 0, 1]], dtype=np.float64)
    mz = np.array([[cz, -sz, 0, 0], [sz, cz, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]], dtype=np.float64)
    return mz @ my @ mx


def compose(position: Vec3, rotation: Vec3, scale: float | Vec3 = 1.0) -> np.ndarray:
    """TRS 合成（スケール → 回転 → 平行移動）。"""
    if isinstance(scale, (int, float)):
        sx = sy = sz = float(scale)
    else:
        sx, sy, sz = (float(v) for v in scale)
    s = np.diag([sx, sy, sz, 1.0])
    r = rotation_xyz(*rotation)
    t = np.eye(4, dtype=np.float64)
    t[:3, 3] = position
    return t @ r @ s


def normal_matrix(model: np.ndarray) -> np.ndarray:
    """法線変換用 3x3（モデル行列上 3x3 の逆転置）。"""
    return np.linalg.inv(model[:3, :3]).T


def to_gl(m: np.ndarray) -> np.ndarray:
    """GPU 転送用に転置した float32（列優先）を返す。"""
    return np.ascontiguousarray(np.asarray(m, dtype=np.float32).T)


__all__ = [
    "identity",
    "perspective",
    "orthographic",
    "look_at",
    "rotation_xyz",
    "compose",
    "normal_matrix",
    "to_gl",
]
