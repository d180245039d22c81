"""共通フィクスチャ。

- 乱数シード固定
- GL を使わない偽レンダラと即時デコードの画像ローダ
"""

from __future__ import annotations

import numpy as np
import pytest

from engine.core.geometry import Geometry
from engine.core.scene import BackgroundImage


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


class FakeRenderer:
    """`set_size/render` の呼び出しだけを記録するレンダラ。"""

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.sizes: list[tuple[int, int]] = []
        self.rendered: list[tuple[object, object]] = []

    def set_size(self, width: int, height: int) -> None:
        self.width, self.height = int(width), int(height)
        self.sizes.append((self.width, self.height))

    def render(self, scene, camera) -> None:  # noqa: ANN001
        self.rendered.append((scene, camera))


class FakeLoader:
    """依頼を溜めておき、`complete()`/`fail()` でコールバックを呼ぶローダ。"""

    def __init__(self) -> None:
        self.requests: list[tuple[object, object, object]] = []

    def load(self, path, on_success=None, on_failure=None) -> None:  # noqa: ANN001
        self.requests.append((path, on_success, on_failure))

    def complete(self, image: BackgroundImage) -> None:
        for _, ok, _ in self.requests:
            ok(image)
        self.requests.clear()

    def fail(self, error: BaseException) -> None:
        for path, _, ng in self.requests:
            ng(path, error)
        self.requests.clear()

    def tick(self, dt: float) -> None:
        pass


@pytest.fixture()
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture()
def fake_loader() -> FakeLoader:
    return FakeLoader()


@pytest.fixture()
def tiny_image() -> BackgroundImage:
    return BackgroundImage(width=2, height=2, pixels=bytes(16), source="tiny.png")


@pytest.fixture()
def geom_two_lines() -> Geometry:
    a = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], dtype=np.float32)
    b = np.array([[0.0, 1.0, 0.0], [1.0, 1.0, 0.0], [2.0, 1.0, 0.0]], dtype=np.float32)
    return Geometry.from_lines([a, b])
