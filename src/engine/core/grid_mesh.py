"""
どこで: `engine.core.grid_mesh`。
何を: XZ 平面上の規則格子メッシュ（元位置/現在位置/法線/三角形/ワイヤフレーム辺）。
なぜ: 地形変位アニメーションの唯一の状態を 1 か所に閉じ込め、「縦方向のみ変位」の不変条件を守るため。

レイアウト:
- 頂点は行優先（z 方向の行 → x 方向の列）。`(w_segments + 1) * (d_segments + 1)` 個。
- x は `-width/2 .. width/2`、z は `-depth/2 .. depth/2`、y は 0。
- 各セルは三角形 2 枚（`a,b,d` / `b,c,d`）。法線は +Y を向く。
"""

from __future__ import annotations

import numpy as np


class GridMesh:
    """変形可能な格子メッシュ。

    `original_positions` は生成後に不変（読み取り専用）。描画側は `version` の変化で
    再アップロードを判断する。
    """

    __slots__ = (
        "width",
        "depth",
        "w_segments",
        "d_segments",
        "original_positions",
        "positions",
        "normals",
        "indices",
        "_edges",
        "version",
    )

    def __init__(self, width: float, depth: float, w_segments: int, d_segments: int) -> None:
        if width <= 0 or depth <= 0:
            raise ValueError(f"width/depth は正である必要があります: {(width, depth)}")
        if int(w_segments) < 1 or int(d_segments) < 1:
            raise ValueError(f"分割数は 1 以上である必要があります: {(w_segments, d_segments)}")
        self.width = float(width)
        self.depth = float(depth)
        self.w_segments = int(w_segments)
        self.d_segments = int(d_segments)

        positions = _plane_positions(self.width, self.depth, self.w_segments, self.d_segments)
        original = positions.copy()
        original.setflags(write=False)
        self.original_positions = original
        self.positions = positions
        self.indices = _plane_indices(self.w_segments, self.d_segments)
        self.normals = np.zeros_like(positions)
        self._edges: np.ndarray | None = None
        self.version = 0
        self.compute_vertex_normals()

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])

    @property
    def edges(self) -> np.ndarray:
        """三角形の一意な辺 `(E, 2)` uint32（ワイヤフレーム描画用、遅延生成）。"""
        if self._edges is None:
            tri = self.indices
            e = np.concatenate([tri[:, [0, 1]], tri[:, [1, 2]], tri[:, [2, 0]]], axis=0)
            e = np.sort(e, axis=1)
            self._edges = np.unique(e, axis=0).astype(np.uint32)
        return self._edges

    def set_heights(self, heights: np.ndarray) -> None:
        """各頂点の Y を `heights` で置き換える（X/Z は変更しない）。

        Raises
        ------
        ValueError
            `heights` の長さが頂点数と一致しない場合。
        """
        h = np.asarray(heights, dtype=np.float32).reshape(-1)
        if h.shape[0] != self.vertex_count:
            raise ValueError(
                f"変位配列の長さ {h.shape[0]} が頂点数 {self.vertex_count} と一致しません"
            )
        self.positions[:, 1] = h
        self.mark_dirty()

    def reset(self) -> None:
        """現在位置を元位置に戻す。"""
        self.positions[:] = self.original_positions
        self.compute_vertex_normals()
        self.mark_dirty()

    def mark_dirty(self) -> None:
        self.version += 1

    def compute_vertex_normals(self) -> None:
        """面積重み付きの頂点法線を再計算する。"""
        p = self.positions
        tri = self.indices
        v0 = p[tri[:, 0]]
        v1 = p[tri[:, 1]]
        v2 = p[tri[:, 2]]
        face = np.cross(v2 - v1, v0 - v1)
        acc = np.zeros_like(p)
        for k in range(3):
            np.add.at(acc, tri[:, k], face)
        lengths = np.linalg.norm(acc, axis=1, keepdims=True)
        np.divide(acc, lengths, out=acc, where=lengths > 0)
        self.normals = acc.astype(np.float32, copy=False)

    def interleaved(self) -> np.ndarray:
        """`[x, y, z, nx, ny, nz]` を並べた (N, 6) float32（VBO 用）。"""
        return np.ascontiguousarray(np.hstack([self.positions, self.normals]), dtype=np.float32)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return (
            f"GridMesh({self.width}x{self.depth}, segments={self.w_segments}x{self.d_segments}, "
            f"vertices={self.vertex_count})"
        )


def _plane_positions(width: float, depth: float, w_segments: int, d_segments: int) -> np.ndarray:
    xs = np.arange(w_segments + 1, dtype=np.float64) * (width / w_segments) - width / 2.0
    zs = np.arange(d_segments + 1, dtype=np.float64) * (depth / d_segments) - depth / 2.0
    gx, gz = np.meshgrid(xs, zs)
    out = np.zeros((gx.size, 3), dtype=np.float32)
    out[:, 0] = gx.reshape(-1)
    out[:, 2] = gz.reshape(-1)
    return out


def _plane_indices(w_segments: int, d_segments: int) -> np.ndarray:
    cols = w_segments + 1
    ix, iz = np.meshgrid(np.arange(w_segments), np.arange(d_segments))
    ix = ix.reshape(-1)
    iz = iz.reshape(-1)
    a = ix + cols * iz
    b = ix + cols * (iz + 1)
    c = (ix + 1) + cols * (iz + 1)
    d = (ix + 1) + cols * iz
    tris = np.empty((a.size * 2, 3), dtype=np.uint32)
    tris[0::2] = np.stack([a, b, d], axis=1)
    tris[1::2] = np.stack([b, c, d], axis=1)
    return tris


__all__ = ["GridMesh"]
