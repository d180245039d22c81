"""
terrain エフェクト（ノイズによる地形の高さ変位）

- 格子メッシュの各頂点について、元の位置から縦方向（Y）だけをずらします。
  `y = y0 + noise(x0 * frequency, time, z0 * frequency) * amplitude`
- 時間は 1 フレームごとに `speed * 0.01` ずつ進みます（経過秒には依存しません）。

主なパラメータ:
- speed: 時間の進み具合。
- frequency: 空間周波数。大きいほど細かい起伏になる。
- amplitude: 変位量。0 なら元の平面に戻る。

実装メモ:
- `displace_heights` は (元位置, frequency, time, amplitude) だけで決まる純関数です。
- ノイズは `effects.noise.improved_noise_points`（改良 Perlin, ≈ [-1, 1]）を使用。
"""

from __future__ import annotations

import logging

import numpy as np

from common.param_utils import map_range
from engine.core.grid_mesh import GridMesh

from .noise import ValueNoise, improved_noise_points

logger = logging.getLogger(__name__)

# 1 フレームあたりの時間進行係数（time += speed * TIME_STEP_SCALE）
TIME_STEP_SCALE: float = 0.01


def displace_heights(
    original: np.ndarray,
    *,
    time: float,
    frequency: float,
    amplitude: float,
) -> np.ndarray:
    """元位置 `(N, 3)` から変位後の Y 座標 `(N,)` float32 を返す。"""
    o = np.asarray(original, dtype=np.float64).reshape(-1, 3)
    base_y = o[:, 1]
    if o.shape[0] == 0 or amplitude == 0.0:
        return base_y.astype(np.float32)
    n = improved_noise_points(o[:, 0] * frequency, float(time), o[:, 2] * frequency)
    return (base_y + n * amplitude).astype(np.float32)


class TerrainAnimator:
    """`GridMesh` をフレームごとに変位させる。

    `tick()` ごとに時間を進め、高さを書き換えて法線を再計算する。
    X/Z は `GridMesh.set_heights` が触らないため常に元位置と一致する。
    """

    def __init__(
        self,
        mesh: GridMesh,
        *,
        speed: float = 0.5,
        frequency: float = 0.03,
        amplitude: float = 8.0,
        time: float = 0.0,
    ) -> None:
        self.mesh = mesh
        self.speed = float(speed)
        self.frequency = float(frequency)
        self.amplitude = float(amplitude)
        self.time = float(time)
        logger.debug(
            "terrain animator: speed=%s frequency=%s amplitude=%s",
            self.speed,
            self.frequency,
            self.amplitude,
        )

    def apply(self) -> None:
        """現在の `time` で高さを書き換え、法線を再計算する。"""
        heights = displace_heights(
            self.mesh.original_positions,
            time=self.time,
            frequency=self.frequency,
            amplitude=self.amplitude,
        )
        self.mesh.set_heights(heights)
        self.mesh.compute_vertex_normals()

    def step(self) -> None:
        self.time += self.speed * TIME_STEP_SCALE
        self.apply()

    def tick(self, dt: float) -> None:
        self.step()


def layered_height_map(
    noise: ValueNoise,
    cols: int,
    rows: int,
    *,
    noise_scale: float,
    time: float,
    height_scale: float,
) -> np.ndarray:
    """2 層の値ノイズを重ねた高さマップ `(cols, rows)` float32。

    `main = noise(x*s, y*s, t)`、`detail = noise(2x*s, 2y*s, 1.5t) * 0.5` として
    `map(main + detail*0.3, 0, 1.3, -height_scale, height_scale)` を返す（x, y は格子 index）。
    """
    if int(cols) <= 0 or int(rows) <= 0:
        return np.empty((max(int(cols), 0), max(int(rows), 0)), dtype=np.float32)
    gx, gy = np.meshgrid(
        np.arange(int(cols), dtype=np.float64),
        np.arange(int(rows), dtype=np.float64),
        indexing="ij",
    )
    main = noise.noise_points(gx * noise_scale, gy * noise_scale, time)
    detail = noise.noise_points(gx * noise_scale * 2.0, gy * noise_scale * 2.0, time * 1.5) * 0.5
    return np.asarray(
        map_range(main + detail * 0.3, 0.0, 1.3, -height_scale, height_scale), dtype=np.float32
    )


__all__ = ["TIME_STEP_SCALE", "displace_heights", "TerrainAnimator", "layered_height_map"]
