"""
どこで: `util.constants`。
何を: ノイズ表・描画定数・ギャラリー既定値など、モジュール横断の不変値を集約。
なぜ: マジックナンバーの散在を避け、テストから同じ値を参照できるようにするため。
"""

from __future__ import annotations

import numpy as np

# ---- 改良 Perlin ノイズ（Ken Perlin, 2002）の置換表 ----
_PERMUTATION_256 = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225, 140, 36,
    103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148, 247, 120, 234, 75,
    0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32, 57, 177, 33, 88, 237, 149,
    56, 87, 174, 20, 125, 136, 171, 168, 68, 175, 74, 165, 71, 134, 139, 48, 27,
    166, 77, 146, 158, 231, 83, 111, 229, 122, 60, 211, 133, 230, 220, 105, 92, 41,
    55, 46, 245, 40, 244, 102, 143, 54, 65, 25, 63, 161, 1, 216, 80, 73, 209, 76,
    132, 187, 208, 89, 18, 169, 200, 196, 135, 130, 116, 188, 159, 86, 164, 100,
    109, 198, 173, 186, 3, 64, 52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118,
    126, 255, 82, 85, 212, 207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42,
    223, 183, 170, 213, 119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155,
    167, 43, 172, 9, 129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178,
    185, 112, 104, 218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191,
    179, 162, 241, 81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199,
    106, 157, 184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205,
    93, 222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)

# 勾配ベクトル（hash & 15 の 16 通り）。12 辺 + 4 重複で改良ノイズの選択規則と一致させる
_GRADIENTS_3D = (
    (1, 1, 0),
    (-1, 1, 0),
    (1, -1, 0),
    (-1, -1, 0),
    (1, 0, 1),
    (-1, 0, 1),
    (1, 0, -1),
    (-1, 0, -1),
    (0, 1, 1),
    (0, -1, 1),
    (0, 1, -1),
    (0, -1, -1),
    (1, 1, 0),
    (0, -1, 1),
    (-1, 1, 0),
    (0, -1, -1),
)


class _NoiseConst:
    """Numba カーネルへ渡す配列群（読み取り専用）。"""

    def __init__(self) -> None:
        perm = np.array(_PERMUTATION_256 * 2, dtype=np.int32)
        perm.setflags(write=False)
        grads = np.array(_GRADIENTS_3D, dtype=np.float64)
        grads.setflags(write=False)
        self.NOISE_PERMUTATION_TABLE = perm
        self.NOISE_GRADIENTS_3D = grads


NOISE_CONST = _NoiseConst()

# ---- 値ノイズ（octave value noise, 出力 0..1） ----
VALUE_NOISE_SIZE = 4095  # テーブル長 - 1（ビットマスクとして使う）
VALUE_NOISE_YWRAPB = 4
VALUE_NOISE_ZWRAPB = 8
VALUE_NOISE_OCTAVES = 4
VALUE_NOISE_FALLOFF = 0.5

# ---- 描画 ----
PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

DEFAULT_WINDOW_SIZE = (1280, 720)
DEFAULT_FPS = 60
DEFAULT_CAPTION = "Noise Gallery"

# ---- ギャラリー ----
DEFAULT_SKETCH = "terrain_wave"
SKETCH_NAME_PATTERN = r"^[a-z][a-z0-9_]*$"

__all__ = [
    "NOISE_CONST",
    "VALUE_NOISE_SIZE",
    "VALUE_NOISE_YWRAPB",
    "VALUE_NOISE_ZWRAPB",
    "VALUE_NOISE_OCTAVES",
    "VALUE_NOISE_FALLOFF",
    "PRIMITIVE_RESTART_INDEX",
    "DEFAULT_WINDOW_SIZE",
    "DEFAULT_FPS",
    "DEFAULT_CAPTION",
    "DEFAULT_SKETCH",
    "SKETCH_NAME_PATTERN",
]
