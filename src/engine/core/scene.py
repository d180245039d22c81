"""
どこで: `engine.core.scene`。
何を: 最小のシーングラフ（Scene/Group/MeshObject/LineObject/ライト/背景画像）。
なぜ: スケッチは「何を置くか」だけを記述し、描画は `engine.render` に任せるため。

各オブジェクトは位置・オイラー回転（X→Y→Z, ラジアン）・一様スケールを持ち、
`world_matrix()` で親の変換と合成される。GPU 側は `version` の変化で再アップロードする。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from common.types import RGBA
from util.color import normalize_color

from .geometry import Geometry
from .grid_mesh import GridMesh
from .transforms import compose


class SceneObject:
    """位置/回転/スケールと親子関係を持つノード。"""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.visible = True
        self.position = np.zeros(3, dtype=np.float64)
        self.rotation = np.zeros(3, dtype=np.float64)
        self.scale = 1.0
        self.parent: Group | None = None

    def local_matrix(self) -> np.ndarray:
        return compose(tuple(self.position), tuple(self.rotation), self.scale)

    def world_matrix(self) -> np.ndarray:
        m = self.local_matrix()
        node = self.parent
        while node is not None:
            m = node.local_matrix() @ m
            node = node.parent
        return m


class Group(SceneObject):
    """子オブジェクトをまとめて変換するノード。"""

    def __init__(self, name: str = "") -> None:
        super().__init__(name)
        self.children: list[SceneObject] = []

    def add(self, *objs: SceneObject) -> None:
        for obj in objs:
            if obj.parent is not None and obj in obj.parent.children:
                obj.parent.children.remove(obj)
            obj.parent = self
            self.children.append(obj)

    def remove(self, obj: SceneObject) -> None:
        if obj in self.children:
            self.children.remove(obj)
            obj.parent = None

    def traverse(self) -> Iterator[SceneObject]:
        """自身を除く子孫を深さ優先で返す（非表示ノードの子は辿らない）。"""
        for child in self.children:
            if not child.visible:
                continue
            yield child
            if isinstance(child, Group):
                yield from child.traverse()


@dataclass
class Material:
    """メッシュ用マテリアル。

    - `wireframe=True` は三角形の辺を無照明の単色線で描く。
    - `lit=False` はライトを無視した単色塗り。
    """

    color: RGBA = (1.0, 1.0, 1.0, 1.0)
    shininess: float = 30.0
    specular: RGBA = (0.07, 0.07, 0.07, 1.0)
    wireframe: bool = False
    lit: bool = True

    def __post_init__(self) -> None:
        self.color = normalize_color(self.color)
        self.specular = normalize_color(self.specular)


class MeshObject(SceneObject):
    """GridMesh + Material。"""

    def __init__(self, mesh: GridMesh, material: Material | None = None, name: str = "") -> None:
        super().__init__(name)
        self.mesh = mesh
        self.material = material or Material()

    @property
    def version(self) -> int:
        return self.mesh.version


class LineObject(SceneObject):
    """Geometry をライン（ポリライン）として描く。"""

    def __init__(
        self,
        geometry: Geometry,
        color: object = (1.0, 1.0, 1.0, 1.0),
        *,
        opacity: float = 1.0,
        thickness: float | None = None,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self._geometry = geometry
        self.color = normalize_color(color)
        self.opacity = float(opacity)
        self.thickness = thickness
        self.version = 0

    @property
    def geometry(self) -> Geometry:
        return self._geometry

    @geometry.setter
    def geometry(self, geometry: Geometry) -> None:
        self._geometry = geometry
        self.version += 1

    @property
    def rgba(self) -> RGBA:
        """不透明度を掛けた描画色。"""
        r, g, b, a = self.color
        return (r, g, b, a * self.opacity)


@dataclass
class AmbientLight:
    color: RGBA = (0.25, 0.25, 0.25, 1.0)
    intensity: float = 1.0

    def __post_init__(self) -> None:
        self.color = normalize_color(self.color)


@dataclass
class DirectionalLight:
    """平行光源。`position` は原点から見た光源方向（正規化して保持）。"""

    color: RGBA = (1.0, 1.0, 1.0, 1.0)
    intensity: float = 1.0
    position: tuple[float, float, float] = (0.0, 1.0, 0.0)

    def __post_init__(self) -> None:
        self.color = normalize_color(self.color)
        v = np.asarray(self.position, dtype=np.float64)
        n = float(np.linalg.norm(v))
        if n == 0:
            raise ValueError("DirectionalLight.position はゼロベクトルにできません")
        self.position = tuple(float(x) for x in v / n)  # type: ignore[assignment]


@dataclass
class BackgroundImage:
    """キャンバス全面に引き伸ばして描く画像（RGBA, 下行から上行の順）。"""

    width: int
    height: int
    pixels: bytes
    source: str = ""
    version: int = 0

    def draw_rect(self, canvas_width: float, canvas_height: float) -> tuple[float, float, float, float]:
        """描画矩形 `(x, y, w, h)`。縦横比は保たず常にキャンバスと一致させる。"""
        return (0.0, 0.0, float(canvas_width), float(canvas_height))


class Scene(Group):
    """ルートノード。背景色・背景画像・ライトを保持する。"""

    def __init__(self, background: object = (0.0, 0.0, 0.0, 1.0)) -> None:
        super().__init__("scene")
        self.background: RGBA = normalize_color(background)
        self.background_image: BackgroundImage | None = None
        self.ambient: list[AmbientLight] = []
        self.directional: list[DirectionalLight] = []

    def add_light(self, light: AmbientLight | DirectionalLight) -> None:
        if isinstance(light, AmbientLight):
            self.ambient.append(light)
        else:
            self.directional.append(light)

    def set_background(self, color: object) -> None:
        self.background = normalize_color(color)

    def ambient_rgb(self) -> tuple[float, float, float]:
        """全環境光の合計（RGB, 強度込み）。"""
        acc = np.zeros(3, dtype=np.float64)
        for light in self.ambient:
            acc += np.asarray(light.color[:3]) * light.intensity
        return (float(acc[0]), float(acc[1]), float(acc[2]))


__all__ = [
    "SceneObject",
    "Group",
    "Material",
    "MeshObject",
    "LineObject",
    "AmbientLight",
    "DirectionalLight",
    "BackgroundImage",
    "Scene",
]
