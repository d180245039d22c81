"""
どこで: `engine.core.geometry`。
何を: 線描画用のポリライン集合 `Geometry`（coords + offsets）と純関数の変換群。
なぜ: 等高線・十字記号・ヘルパ線など「線で描く物」を 1 種類の表現に揃え、GPU 転送を単純化するため。

データモデル（不変条件）:
- `coords: float32 ndarray (N, 3)`: 全頂点を 1 本の連続メモリで保持（行は XYZ）。
- `offsets: int32 ndarray (M+1,)`: 各ポリラインの開始 index（末尾は必ず N）。
- i 本目のポリラインは `coords[offsets[i] : offsets[i+1]]`。
- 2D 入力は Z=0 で補う。

    # 2 本のポリライン（線0は3点、線1は2点）
    #   coords (N=5): [0,0,0] [1,0,0] [1,1,0] [2,2,0] [3,2,0]
    #   offsets     : [0, 3, 5]

- 空ジオメトリは `coords.shape==(0,3)`, `offsets==[0]`。
- 変換 `translate/scale/rotate/concat` はすべて新しいインスタンスを返す。
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

import numpy as np

from common.types import Vec3

NumberLike = float | int
LineLike = np.ndarray | Sequence[NumberLike] | Sequence[Sequence[NumberLike]]


def _normalize_geometry_input(
    coords: np.ndarray,
    offsets: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """`Geometry` 生成時の内部正規化ヘルパ。"""

    coords_arr = np.asarray(coords, dtype=np.float32)
    if coords_arr.ndim != 2 or coords_arr.shape[1] != 3:
        raise ValueError("coords は形状 (N, 3) の配列である必要があります。")
    if not coords_arr.flags.c_contiguous:
        coords_arr = np.ascontiguousarray(coords_arr, dtype=np.float32)

    offsets_arr = np.asarray(offsets, dtype=np.int32)
    if offsets_arr.ndim != 1:
        raise ValueError("offsets は 1 次元配列である必要があります。")
    if offsets_arr.size == 0:
        raise ValueError("offsets は少なくとも1要素を含む必要があります。")
    if offsets_arr[0] != 0:
        raise ValueError("offsets[0] は常に 0 である必要があります。")
    if offsets_arr[-1] != coords_arr.shape[0]:
        raise ValueError("offsets[-1] は coords の行数と一致する必要があります。")
    if np.any(np.diff(offsets_arr) < 0):
        raise ValueError("offsets は単調非減少である必要があります。")
    if not offsets_arr.flags.c_contiguous:
        offsets_arr = np.ascontiguousarray(offsets_arr, dtype=np.int32)

    return coords_arr, offsets_arr


class Geometry:
    """ポリライン集合。

    フィールド:
    - `coords (N,3) float32`: すべての点列を連結した配列。
    - `offsets (M+1,) int32`: 各ポリラインの開始 index（末尾は N）。
    """

    __slots__ = ("coords", "offsets")

    coords: np.ndarray
    offsets: np.ndarray

    def __init__(self, coords: np.ndarray, offsets: np.ndarray) -> None:
        norm_coords, norm_offsets = _normalize_geometry_input(coords, offsets)
        self.coords = norm_coords
        self.offsets = norm_offsets

    # ── ファクトリ ───────────────────
    @classmethod
    def empty(cls) -> "Geometry":
        return cls(np.empty((0, 3), dtype=np.float32), np.array([0], dtype=np.int32))

    @classmethod
    def from_lines(cls, lines: Iterable[LineLike]) -> "Geometry":
        """線分集合を統一表現に正規化して `Geometry` を生成する。

        Parameters
        ----------
        lines : Iterable[LineLike]
            各要素は座標列。`(K, 2)` は Z=0 を補完、`(K, 3)` はそのまま、
            `(3K,)` の 1 次元ベクトルは `(x, y, z)` の並びとして整形する。

        Returns
        -------
        Geometry
            正規化済みジオメトリ。

        Raises
        ------
        ValueError
            形状が `(K,2)/(K,3)/(3K,)` いずれにも適合しない場合。
        """
        np_lines: list[np.ndarray] = []
        for line in lines:
            arr = np.asarray(line, dtype=np.float32)
            if arr.ndim == 1:
                if arr.size % 3 != 0:
                    raise ValueError(
                        "1次元入力の長さは3の倍数である必要があります（(x, y, z) の並び）"
                    )
                arr = arr.reshape(-1, 3)
            elif arr.ndim != 2:
                raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
            elif arr.shape[1] == 2:
                zeros = np.zeros((arr.shape[0], 1), dtype=np.float32)
                arr = np.hstack([arr, zeros])
            elif arr.shape[1] != 3:
                raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
            np_lines.append(arr)

        if not np_lines:
            return cls.empty()

        offsets = np.empty(len(np_lines) + 1, dtype=np.int32)
        offsets[0] = 0
        for i, arr in enumerate(np_lines, start=1):
            offsets[i] = offsets[i - 1] + arr.shape[0]
        coords = np.concatenate(np_lines, axis=0)
        return cls(coords, offsets)

    @classmethod
    def from_segments(cls, segments: np.ndarray) -> "Geometry":
        """2 点線分の配列 `(K, 2, 2|3)` から `Geometry` を生成する（ループ無しの高速経路）。"""
        seg = np.asarray(segments, dtype=np.float32)
        if seg.size == 0:
            return cls.empty()
        if seg.ndim != 3 or seg.shape[1] != 2 or seg.shape[2] not in (2, 3):
            raise ValueError(f"segments は (K, 2, 2|3) である必要があります: {seg.shape}")
        if seg.shape[2] == 2:
            seg = np.concatenate([seg, np.zeros(seg.shape[:2] + (1,), dtype=np.float32)], axis=2)
        k = seg.shape[0]
        coords = seg.reshape(k * 2, 3)
        offsets = np.arange(0, 2 * k + 1, 2, dtype=np.int32)
        return cls(coords, offsets)

    # ── 基本操作（すべて純粋） ────────
    def as_arrays(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        """内部配列を返す。

        `copy=False` は読み取り専用ビューを返す。書き込みが必要なら `copy=True`。
        """
        if copy:
            return self.coords.copy(), self.offsets.copy()
        coords_view = self.coords.view()
        offsets_view = self.offsets.view()
        coords_view.setflags(write=False)
        offsets_view.setflags(write=False)
        return coords_view, offsets_view

    def lines(self) -> Iterator[np.ndarray]:
        """各ポリラインの座標ビューを順に返す。"""
        for i in range(len(self)):
            yield self.coords[self.offsets[i] : self.offsets[i + 1]]

    @property
    def is_empty(self) -> bool:
        return self.coords.size == 0

    def translate(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Geometry":
        """平行移動（純関数）。"""
        if self.is_empty:
            return Geometry(self.coords.copy(), self.offsets.copy())
        vec = np.array([dx, dy, dz], dtype=np.float32)
        return Geometry(self.coords + vec, self.offsets.copy())

    def scale(
        self,
        sx: float = 1.0,
        sy: float | None = None,
        sz: float | None = None,
        center: Vec3 = (0.0, 0.0, 0.0),
    ) -> "Geometry":
        """拡大縮小（純関数）。`sy/sz` 省略時は `sx` で等方拡大。"""
        if sy is None:
            sy = sx
        if sz is None:
            sz = sx
        if self.is_empty:
            return Geometry(self.coords.copy(), self.offsets.copy())
        pivot = np.array(center, dtype=np.float32)
        factors = np.array([sx, sy, sz], dtype=np.float32)
        new = (self.coords - pivot) * factors + pivot
        return Geometry(new, self.offsets.copy())

    def rotate(
        self,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        center: Vec3 = (0.0, 0.0, 0.0),
    ) -> "Geometry":
        """回転（純関数）。X→Y→Z の順に右手系で適用（ラジアン）。

        例として `(1, 0, 0)` を Z 軸に `π/2` 回転すると `(0, 1, 0)`。
        """
        if self.is_empty or (x == 0 and y == 0 and z == 0):
            return Geometry(self.coords.copy(), self.offsets.copy())

        cx, cy, cz = center
        c = self.coords.copy()
        c[:, 0] -= cx
        c[:, 1] -= cy
        c[:, 2] -= cz

        if x != 0:
            cxr, sxr = np.float32(np.cos(x)), np.float32(np.sin(x))
            y_new = c[:, 1] * cxr - c[:, 2] * sxr
            z_new = c[:, 1] * sxr + c[:, 2] * cxr
            c[:, 1], c[:, 2] = y_new, z_new

        if y != 0:
            cyr, syr = np.float32(np.cos(y)), np.float32(np.sin(y))
            x_new = c[:, 0] * cyr + c[:, 2] * syr
            z_new = -c[:, 0] * syr + c[:, 2] * cyr
            c[:, 0], c[:, 2] = x_new, z_new

        if z != 0:
            czr, szr = np.float32(np.cos(z)), np.float32(np.sin(z))
            x_new = c[:, 0] * czr - c[:, 1] * szr
            y_new = c[:, 0] * szr + c[:, 1] * czr
            c[:, 0], c[:, 1] = x_new, y_new

        c[:, 0] += cx
        c[:, 1] += cy
        c[:, 2] += cz
        return Geometry(c, self.offsets.copy())

    def concat(self, other: "Geometry") -> "Geometry":
        """ポリライン集合の連結（純関数）。

        後段の `offsets[1:]` に先行頂点数を加算して結合する。
        """
        if self.is_empty:
            return Geometry(other.coords.copy(), other.offsets.copy())
        if other.is_empty:
            return Geometry(self.coords.copy(), self.offsets.copy())
        shift = self.coords.shape[0]
        new_coords = np.vstack([self.coords, other.coords]).astype(np.float32, copy=False)
        new_offsets = np.hstack([self.offsets, other.offsets[1:] + shift]).astype(
            np.int32, copy=False
        )
        return Geometry(new_coords, new_offsets)

    def __add__(self, other: "Geometry") -> "Geometry":
        return self.concat(other)

    def __len__(self) -> int:
        """ポリライン本数（`M`）を返す。"""
        return int(self.offsets.shape[0] - 1)

    @property
    def n_vertices(self) -> int:
        return int(self.coords.shape[0])

    @property
    def n_lines(self) -> int:
        return len(self)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Geometry(N={self.n_vertices}, M={self.n_lines})"


def concat_all(parts: Iterable[Geometry]) -> Geometry:
    """複数の `Geometry` を 1 回の結合でまとめる。"""
    items = [g for g in parts if not g.is_empty]
    if not items:
        return Geometry.empty()
    coords = np.concatenate([g.coords for g in items], axis=0)
    offsets = [np.array([0], dtype=np.int32)]
    shift = 0
    for g in items:
        offsets.append(g.offsets[1:] + shift)
        shift += g.n_vertices
    return Geometry(coords, np.concatenate(offsets))


__all__ = ["Geometry", "concat_all"]
