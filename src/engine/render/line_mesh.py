"""
どこで: `engine.render` の低レベルメッシュ層。
何を: 線描画用の VBO/IBO/VAO の確保・更新・解放を担当する `LineMesh`。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from engine.core.geometry import Geometry
from util.constants import PRIMITIVE_RESTART_INDEX

logger = logging.getLogger(__name__)


class LineMesh:
    """
    GPUに頂点やインデックスなどの描画データを送り込む作業を管理
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        initial_reserve: int = 64 * 1024,
        primitive_restart_index: int = PRIMITIVE_RESTART_INDEX,
    ):
        """
        ctx: moderngl コンテキスト。
        program: 線描画用のシェーダープログラム（入力は `in_vert`）。
        VBO (Vertex Buffer Object): GPUに送る「頂点データ」を格納するメモリ。
        IBO (Index Buffer Object): GPUに「頂点の順序（描画のための索引）」を送るメモリ。
        Primitive Restart Index: 描画時に「ここで一旦区切る」という目印。
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve
        self.primitive_restart_index = primitive_restart_index

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = ctx.simple_vertex_array(program, self.vbo, "in_vert", index_buffer=self.ibo)

        self.index_count: int = 0
        self.version: int = -1

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, vbo_size: int, ibo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        grown = False
        if vbo_size > self.vbo.size:
            self.vbo.release()
            self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.initial_reserve), dynamic=True)
            grown = True

        if ibo_size > self.ibo.size:
            self.ibo.release()
            self.ibo = self.ctx.buffer(reserve=max(ibo_size, self.initial_reserve), dynamic=True)
            grown = True

        # VAO は VBO/IBO が差し替わるたびに張り直す
        if grown:
            self.vao.release()
            self.vao = self.ctx.simple_vertex_array(
                self.program, self.vbo, "in_vert", index_buffer=self.ibo
            )

    def upload(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """実際にデータをGPUへ送り込む"""
        self._ensure_capacity(vertices.nbytes, indices.nbytes)

        self.vbo.orphan()
        self.vbo.write(vertices.tobytes())

        self.ibo.orphan()
        self.ibo.write(indices.tobytes())

        self.index_count = len(indices)

    def upload_geometry(self, geometry: Geometry, version: int) -> None:
        if geometry.is_empty:
            self.index_count = 0
        else:
            verts, inds = geometry_to_vertices_indices(geometry, self.primitive_restart_index)
            logger.debug("line upload: verts=%d inds=%d", len(verts), len(inds))
            self.upload(verts, inds)
        self.version = version

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.ibo.release()
        self.vao.release()


def geometry_to_vertices_indices(
    geometry: Geometry,
    primitive_restart_index: int = PRIMITIVE_RESTART_INDEX,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Geometry オブジェクトを VBO/IBO に変換。
    各ポリラインの後ろに primitive restart を挟んだ 1 本のインデックス列にまとめる。
    """
    coords = geometry.coords
    offsets = geometry.offsets

    num_lines = len(offsets) - 1
    total_verts = len(coords)
    total_inds = total_verts + num_lines

    indices = np.empty(total_inds, dtype=np.uint32)
    # 再始動位置（各ライン終端の直後）: offsets[1:] + 行番号
    restart_pos = offsets[1:].astype(np.int64) + np.arange(num_lines, dtype=np.int64)
    mask = np.zeros(total_inds, dtype=bool)
    mask[restart_pos] = True
    indices[~mask] = np.arange(total_verts, dtype=np.uint32)
    indices[mask] = np.uint32(primitive_restart_index)
    return coords, indices


__all__ = ["LineMesh", "geometry_to_vertices_indices"]
