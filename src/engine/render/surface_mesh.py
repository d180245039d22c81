"""
どこで: `engine.render.surface_mesh`。
何を: `GridMesh` の GPU 側表現（位置+法線の VBO、三角形 IBO、ワイヤフレーム辺 IBO）。
なぜ: 格子の位相（三角形/辺）は不変なので IBO は一度だけ送り、毎フレームは VBO だけを更新するため。
"""

from __future__ import annotations

from typing import Any

from engine.core.grid_mesh import GridMesh


class SurfaceMesh:
    """GridMesh 1 つぶんの VBO/IBO/VAO。

    - `surface_vao`: 照明付き塗り（`in_vert`, `in_normal`）
    - `edge_vao`: ワイヤフレーム（線プログラムの `in_vert` のみ、GL_LINES）
    """

    def __init__(self, ctx: Any, surface_program: Any, line_program: Any, mesh: GridMesh):
        self.ctx = ctx
        self.vbo = ctx.buffer(mesh.interleaved().tobytes(), dynamic=True)
        self.tri_ibo = ctx.buffer(mesh.indices.astype("u4").tobytes())
        self.edge_ibo = ctx.buffer(mesh.edges.astype("u4").tobytes())
        self.triangle_index_count = int(mesh.indices.size)
        self.edge_index_count = int(mesh.edges.size)

        self.surface_vao = ctx.vertex_array(
            surface_program,
            [(self.vbo, "3f 3f", "in_vert", "in_normal")],
            index_buffer=self.tri_ibo,
            index_element_size=4,
        )
        # 線プログラムは法線を使わないので 12 バイト読み飛ばす
        self.edge_vao = ctx.vertex_array(
            line_program,
            [(self.vbo, "3f 3x4", "in_vert")],
            index_buffer=self.edge_ibo,
            index_element_size=4,
        )
        self.version = mesh.version

    def sync(self, mesh: GridMesh) -> bool:
        """メッシュの版が進んでいれば頂点データだけ再送する。送った場合 True。"""
        if mesh.version == self.version:
            return False
        self.vbo.write(mesh.interleaved().tobytes())
        self.version = mesh.version
        return True

    def release(self) -> None:
        self.surface_vao.release()
        self.edge_vao.release()
        self.vbo.release()
        self.tri_ibo.release()
        self.edge_ibo.release()


__all__ = ["SurfaceMesh"]
