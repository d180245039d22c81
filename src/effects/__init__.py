"""
どこで: `effects` パッケージ。
何を: ノイズ関数と、それを使った頂点変位（地形アニメーション/高さマップ）を提供。
なぜ: 生成（shapes）と描画（engine.render）から「値を揺らす」処理を分離するため。
"""

from .noise import ValueNoise, improved_noise, improved_noise_points
from .terrain import TerrainAnimator, displace_heights, layered_height_map

__all__ = [
    "ValueNoise",
    "improved_noise",
    "improved_noise_points",
    "TerrainAnimator",
    "displace_heights",
    "layered_height_map",
]
