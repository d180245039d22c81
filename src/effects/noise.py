"""
どこで: `effects.noise`。
何を: 2 種類のノイズ関数を Numba カーネルで提供する。
    - 改良 Perlin ノイズ（Ken Perlin 2002, 出力 ≈ [-1, 1]）: 地形の高さ変位に使用。
    - オクターブ値ノイズ（コサイン補間, 出力 [0, 1)）: 2D パターン/等値線のスカラー場に使用。
なぜ: スケッチ側は「座標 → 値」の純関数として扱えればよく、テーブルや補間の詳細を隠すため。

実装メモ:
- Permutation/Gradient は `util.constants.NOISE_CONST` を参照する。
- 値ノイズのテーブルは 4096 要素の一様乱数で、`seed` から決定的に生成する。
- `NG_USE_NUMBA=0` のときは同じカーネルを Python 関数（`py_func`）として実行する。
"""

from __future__ import annotations

import logging
import math
from typing import Callable

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common import settings
from util.constants import (
    NOISE_CONST,
    VALUE_NOISE_FALLOFF,
    VALUE_NOISE_OCTAVES,
    VALUE_NOISE_SIZE,
    VALUE_NOISE_YWRAPB,
    VALUE_NOISE_ZWRAPB,
)

logger = logging.getLogger(__name__)


def _kernel(fn: Callable) -> Callable:
    """設定に応じてコンパイル済み/純 Python のどちらで実行するかを選ぶ。"""
    if settings.get().USE_NUMBA:
        return fn
    return getattr(fn, "py_func", fn)


# ---- 改良 Perlin ノイズ ----
@njit(fastmath=True, cache=True)
def fade(t):
    """Perlinノイズ用のフェード関数（6t^5 - 15t^4 + 10t^3）。"""
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit(fastmath=True, cache=True)
def lerp(a, b, t):
    """線形補間."""
    return a + t * (b - a)


@njit(fastmath=True, cache=True)
def grad(hash_val, x, y, z, grad3_array):
    """勾配ベクトルとの内積（hash の下位 4bit で 16 通りから選ぶ）。"""
    g = grad3_array[hash_val & 15]
    return g[0] * x + g[1] * y + g[2] * z


@njit(fastmath=True, cache=True)
def perlin_noise_3d(x, y, z, perm_table, grad3_array):
    """3次元改良 Perlin ノイズ。整数格子点上では 0 を返す。"""
    fx = np.floor(x)
    fy = np.floor(y)
    fz = np.floor(z)
    X = int(fx) & 255
    Y = int(fy) & 255
    Z = int(fz) & 255

    x -= fx
    y -= fy
    z -= fz

    u = fade(x)
    v = fade(y)
    w = fade(z)

    A = perm_table[X] + Y
    AA = perm_table[A & 511] + Z  # 511 = 2*256-1
    AB = perm_table[(A + 1) & 511] + Z
    B = perm_table[(X + 1) & 255] + Y
    BA = perm_table[B & 511] + Z
    BB = perm_table[(B + 1) & 511] + Z

    gAA = grad(perm_table[AA & 511], x, y, z, grad3_array)
    gBA = grad(perm_table[BA & 511], x - 1, y, z, grad3_array)
    gAB = grad(perm_table[AB & 511], x, y - 1, z, grad3_array)
    gBB = grad(perm_table[BB & 511], x - 1, y - 1, z, grad3_array)
    gAA1 = grad(perm_table[(AA + 1) & 511], x, y, z - 1, grad3_array)
    gBA1 = grad(perm_table[(BA + 1) & 511], x - 1, y, z - 1, grad3_array)
    gAB1 = grad(perm_table[(AB + 1) & 511], x, y - 1, z - 1, grad3_array)
    gBB1 = grad(perm_table[(BB + 1) & 511], x - 1, y - 1, z - 1, grad3_array)

    return lerp(
        lerp(lerp(gAA, gBA, u), lerp(gAB, gBB, u), v),
        lerp(lerp(gAA1, gBA1, u), lerp(gAB1, gBB1, u), v),
        w,
    )


@njit(fastmath=True, cache=True)
def _perlin_points(xs, ys, zs, perm_table, grad3_array):
    n = xs.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        out[i] = perlin_noise_3d(xs[i], ys[i], zs[i], perm_table, grad3_array)
    return out


def improved_noise(x: float, y: float, z: float) -> float:
    """1 点の改良 Perlin ノイズ値（≈ [-1, 1]）。"""
    fn = _kernel(perlin_noise_3d)
    return float(
        fn(
            float(x),
            float(y),
            float(z),
            NOISE_CONST.NOISE_PERMUTATION_TABLE,
            NOISE_CONST.NOISE_GRADIENTS_3D,
        )
    )


def improved_noise_points(x, y, z) -> np.ndarray:
    """配列（ブロードキャスト可）に対する改良 Perlin ノイズ。返り値は float64。"""
    bx, by, bz = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    shape = bx.shape
    fn = _kernel(_perlin_points)
    out = fn(
        np.ascontiguousarray(bx).reshape(-1),
        np.ascontiguousarray(by).reshape(-1),
        np.ascontiguousarray(bz).reshape(-1),
        NOISE_CONST.NOISE_PERMUTATION_TABLE,
        NOISE_CONST.NOISE_GRADIENTS_3D,
    )
    return out.reshape(shape)


# ---- オクターブ値ノイズ ----
@njit(fastmath=True, cache=True)
def scaled_cosine(i):
    """0..1 をコサインで滑らかに補間する係数へ写す。"""
    return 0.5 * (1.0 - math.cos(i * math.pi))


@njit(cache=True)
def value_noise_3d(x, y, z, table, octaves, falloff):
    """オクターブ値ノイズ。負の座標は絶対値で評価する。出力は [0, 1)。"""
    if x < 0:
        x = -x
    if y < 0:
        y = -y
    if z < 0:
        z = -z

    xi = int(np.floor(x))
    yi = int(np.floor(y))
    zi = int(np.floor(z))
    xf = x - xi
    yf = y - yi
    zf = z - zi

    size = table.shape[0] - 1
    ywrap = 1 << VALUE_NOISE_YWRAPB
    zwrap = 1 << VALUE_NOISE_ZWRAPB

    r = 0.0
    ampl = 0.5
    for _ in range(octaves):
        of = xi + (yi << VALUE_NOISE_YWRAPB) + (zi << VALUE_NOISE_ZWRAPB)

        rxf = scaled_cosine(xf)
        ryf = scaled_cosine(yf)

        n1 = table[of & size]
        n1 += rxf * (table[(of + 1) & size] - n1)
        n2 = table[(of + ywrap) & size]
        n2 += rxf * (table[(of + ywrap + 1) & size] - n2)
        n1 += ryf * (n2 - n1)

        of += zwrap
        n2 = table[of & size]
        n2 += rxf * (table[(of + 1) & size] - n2)
        n3 = table[(of + ywrap) & size]
        n3 += rxf * (table[(of + ywrap + 1) & size] - n3)
        n2 += ryf * (n3 - n2)

        n1 += scaled_cosine(zf) * (n2 - n1)

        r += n1 * ampl
        ampl *= falloff
        xi <<= 1
        xf *= 2
        yi <<= 1
        yf *= 2
        zi <<= 1
        zf *= 2

        if xf >= 1.0:
            xi += 1
            xf -= 1
        if yf >= 1.0:
            yi += 1
            yf -= 1
        if zf >= 1.0:
            zi += 1
            zf -= 1
    return r


@njit(cache=True)
def _value_points(xs, ys, zs, table, octaves, falloff):
    n = xs.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        out[i] = value_noise_3d(xs[i], ys[i], zs[i], table, octaves, falloff)
    return out


class ValueNoise:
    """シード付きオクターブ値ノイズ。

    引数:
        seed: 乱数テーブルのシード。None なら `NG_NOISE_SEED`（既定 0）。
        octaves: オクターブ数（1 以上）。
        falloff: オクターブごとの振幅減衰率（0 < falloff）。

    `noise(x, y, z)` は同じシード・同じ詳細設定なら常に同じ値を返す。
    """

    def __init__(
        self,
        seed: int | None = None,
        *,
        octaves: int = VALUE_NOISE_OCTAVES,
        falloff: float = VALUE_NOISE_FALLOFF,
    ) -> None:
        self.octaves = VALUE_NOISE_OCTAVES
        self.falloff = VALUE_NOISE_FALLOFF
        self.noise_detail(octaves, falloff)
        self.noise_seed(settings.get().NOISE_SEED if seed is None else seed)

    def noise_seed(self, seed: int) -> None:
        """乱数テーブルを作り直す。"""
        rng = np.random.RandomState(int(seed) & 0xFFFFFFFF)
        self.seed = int(seed)
        self._table = rng.random_sample(VALUE_NOISE_SIZE + 1)
        logger.debug("value noise table seeded: %d", self.seed)

    def noise_detail(self, octaves: int, falloff: float | None = None) -> None:
        if int(octaves) < 1:
            raise ValueError(f"octaves は 1 以上である必要があります: {octaves}")
        self.octaves = int(octaves)
        if falloff is not None:
            if falloff <= 0:
                raise ValueError(f"falloff は正である必要があります: {falloff}")
            self.falloff = float(falloff)

    def noise(self, x: float, y: float = 0.0, z: float = 0.0) -> float:
        fn = _kernel(value_noise_3d)
        return float(fn(float(x), float(y), float(z), self._table, self.octaves, self.falloff))

    __call__ = noise

    def noise_points(self, x, y=0.0, z=0.0) -> np.ndarray:
        """配列（ブロードキャスト可）に対する値ノイズ。返り値は float64。"""
        bx, by, bz = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
        )
        shape = bx.shape
        fn = _kernel(_value_points)
        out = fn(
            np.ascontiguousarray(bx).reshape(-1),
            np.ascontiguousarray(by).reshape(-1),
            np.ascontiguousarray(bz).reshape(-1),
            self._table,
            self.octaves,
            self.falloff,
        )
        return out.reshape(shape)

    def noise_grid(self, xs, ys, z: float = 0.0) -> np.ndarray:
        """`xs` × `ys` の格子で評価した `(len(ys), len(xs))` 配列。"""
        gx, gy = np.meshgrid(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64))
        return self.noise_points(gx, gy, z)


__all__ = [
    "fade",
    "lerp",
    "grad",
    "perlin_noise_3d",
    "improved_noise",
    "improved_noise_points",
    "scaled_cosine",
    "value_noise_3d",
    "ValueNoise",
]
