"""
どこで: `engine.render` の高レベル描画。
何を: `Scene` を走査し、背景画像・格子メッシュ（照明/ワイヤフレーム）・ラインを ModernGL で描画。
なぜ: アップロード/描画/リソース寿命を一箇所に集約し、スケッチ側はシーングラフだけを扱えるようにするため。

GPU 側のメッシュはオブジェクト単位でキャッシュし、`version` が進んだ時だけ再アップロードする。
シーンから外れたオブジェクトの GPU リソースは次の描画で解放する。
"""

from __future__ import annotations

import logging
from typing import Any

import moderngl as mgl
import numpy as np

from common import settings
from engine.core.camera import Camera
from engine.core.scene import LineObject, MeshObject, Scene
from engine.core.transforms import normal_matrix, to_gl

from .image_quad import ImageQuad
from .line_mesh import LineMesh
from .shader import Shader
from .surface_mesh import SurfaceMesh

logger = logging.getLogger(__name__)


class SceneRenderer:
    """シーン全体を 1 フレームぶん描画するレンダラ。

    `set_size(w, h)` は論理ピクセルで受け取り、`pixel_ratio` を掛けてビューポートに反映する。
    """

    def __init__(
        self,
        ctx: Any,
        *,
        line_thickness: float | None = None,
        pixel_ratio: float = 1.0,
    ):
        self.ctx = ctx
        self.line_program = Shader.create_shader(ctx)
        self.surface_program = Shader.create_surface_shader(ctx)
        self.image_program = Shader.create_image_shader(ctx)
        self._image_quad = ImageQuad(ctx, self.image_program)

        # id(obj) -> (obj, GPU メッシュ)。obj を保持して id の再利用と取り違えない
        self._line_meshes: dict[int, tuple[LineObject, LineMesh]] = {}
        self._surface_meshes: dict[int, tuple[MeshObject, SurfaceMesh]] = {}

        if line_thickness is None:
            line_thickness = settings.get().LINE_THICKNESS
        self.line_thickness = float(line_thickness)
        self.pixel_ratio = float(pixel_ratio)
        self.width = 0
        self.height = 0
        self.frame_count = 0
        self._released = False
        self._debug = bool(settings.get().RENDER_DEBUG)

    @classmethod
    def from_window(cls, window: Any, **kwargs: Any) -> "SceneRenderer":
        """pyglet ウィンドウの GL コンテキストに ModernGL をぶら下げて生成する。"""
        window.switch_to()
        ctx = mgl.create_context()
        ratio = window.pixel_ratio() if hasattr(window, "pixel_ratio") else 1.0
        renderer = cls(ctx, pixel_ratio=ratio, **kwargs)
        renderer.set_size(window.width, window.height)
        return renderer

    # ---- サイズ ----
    def set_size(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.ctx.viewport = (
            0,
            0,
            int(round(self.width * self.pixel_ratio)),
            int(round(self.height * self.pixel_ratio)),
        )

    @property
    def aspect(self) -> float:
        return self.width / self.height if self.height > 0 else 1.0

    # ---- 描画 ----
    def render(self, scene: Scene, camera: Camera) -> None:
        ctx = self.ctx
        r, g, b, a = scene.background
        ctx.clear(r, g, b, a, depth=1.0)
        ctx.enable(mgl.BLEND)
        ctx.blend_func = mgl.SRC_ALPHA, mgl.ONE_MINUS_SRC_ALPHA

        if scene.background_image is not None and self.width > 0 and self.height > 0:
            ctx.disable(mgl.DEPTH_TEST)
            self._image_quad.render(scene.background_image, self.width, self.height)

        ctx.enable(mgl.DEPTH_TEST)
        view_proj = camera.projection_matrix @ camera.view_matrix
        seen: set[int] = set()
        n_lines = 0
        n_meshes = 0
        for obj in scene.traverse():
            if isinstance(obj, MeshObject):
                self._draw_mesh(obj, scene, camera, view_proj)
                n_meshes += 1
            elif isinstance(obj, LineObject):
                self._draw_lines(obj, view_proj)
                n_lines += 1
            else:
                continue
            seen.add(id(obj))
        self._evict(seen)
        self.frame_count += 1
        if self._debug:
            logger.debug("frame %d: meshes=%d lines=%d", self.frame_count, n_meshes, n_lines)

    def _line_mesh_for(self, obj: LineObject) -> LineMesh:
        entry = self._line_meshes.get(id(obj))
        if entry is None or entry[0] is not obj:
            if entry is not None:
                entry[1].release()
            mesh = LineMesh(self.ctx, self.line_program)
            self._line_meshes[id(obj)] = (obj, mesh)
            return mesh
        return entry[1]

    def _surface_mesh_for(self, obj: MeshObject) -> SurfaceMesh:
        entry = self._surface_meshes.get(id(obj))
        if entry is None or entry[0] is not obj:
            if entry is not None:
                entry[1].release()
            mesh = SurfaceMesh(self.ctx, self.surface_program, self.line_program, obj.mesh)
            self._surface_meshes[id(obj)] = (obj, mesh)
            return mesh
        mesh = entry[1]
        mesh.sync(obj.mesh)
        return mesh

    def _apply_line_style(self, mvp: np.ndarray, color: Any, thickness: float) -> None:
        self.line_program["projection"].write(to_gl(mvp).tobytes())
        self.line_program["line_thickness"].value = float(thickness)
        self.line_program["aspect"].value = float(self.aspect)
        self.line_program["color"].value = tuple(float(c) for c in color)

    def _draw_lines(self, obj: LineObject, view_proj: np.ndarray) -> None:
        mesh = self._line_mesh_for(obj)
        if mesh.version != obj.version:
            mesh.upload_geometry(obj.geometry, obj.version)
        if mesh.index_count == 0:
            return
        thickness = obj.thickness if obj.thickness is not None else self.line_thickness
        self._apply_line_style(view_proj @ obj.world_matrix(), obj.rgba, thickness)
        mesh.vao.render(mode=mgl.LINE_STRIP, vertices=mesh.index_count)

    def _draw_mesh(
        self, obj: MeshObject, scene: Scene, camera: Camera, view_proj: np.ndarray
    ) -> None:
        mesh = self._surface_mesh_for(obj)
        model = obj.world_matrix()
        mvp = view_proj @ model
        material = obj.material

        if material.wireframe:
            self._apply_line_style(mvp, material.color, self.line_thickness)
            mesh.edge_vao.render(mode=mgl.LINES, vertices=mesh.edge_index_count)
            return

        prog = self.surface_program
        prog["mvp"].write(to_gl(mvp).tobytes())
        prog["model"].write(to_gl(model).tobytes())
        prog["normal_matrix"].write(to_gl(normal_matrix(model)).tobytes())
        prog["color"].value = tuple(float(c) for c in material.color)
        prog["specular"].value = tuple(float(c) for c in material.specular[:3])
        prog["shininess"].value = float(material.shininess)
        prog["ambient"].value = scene.ambient_rgb()
        if scene.directional:
            light = scene.directional[0]
            prog["light_dir"].value = tuple(float(v) for v in light.position)
            prog["light_color"].value = tuple(float(c) * light.intensity for c in light.color[:3])
        else:
            prog["light_dir"].value = (0.0, 1.0, 0.0)
            prog["light_color"].value = (0.0, 0.0, 0.0)
        eye = getattr(camera, "position", (0.0, 0.0, 0.0))
        prog["camera_pos"].value = tuple(float(v) for v in eye)
        prog["lit"].value = 1 if material.lit else 0
        mesh.surface_vao.render(mode=mgl.TRIANGLES, vertices=mesh.triangle_index_count)

    def _evict(self, seen: set[int]) -> None:
        for key in [k for k in self._line_meshes if k not in seen]:
            self._line_meshes.pop(key)[1].release()
        for key in [k for k in self._surface_meshes if k not in seen]:
            self._surface_meshes.pop(key)[1].release()

    # ---- 読み出し/解放 ----
    def read_pixels(self) -> tuple[int, int, bytes]:
        """既定フレームバッファを RGBA で読み出す（行は下から上）。"""
        x, y, w, h = self.ctx.viewport
        data = self.ctx.screen.read(viewport=(x, y, w, h), components=4, alignment=1)
        return int(w), int(h), data

    def release(self) -> None:
        """GPU リソースを解放する（複数回呼んでも 1 回だけ実行）。"""
        if self._released:
            return
        self._released = True
        for _, mesh in self._line_meshes.values():
            mesh.release()
        for _, smesh in self._surface_meshes.values():
            smesh.release()
        self._line_meshes.clear()
        self._surface_meshes.clear()
        self._image_quad.release()
        self.line_program.release()
        self.surface_program.release()
        self.image_program.release()
        logger.debug("renderer released")


__all__ = ["SceneRenderer"]
