"""
どこで: `engine.io.image_loader`。
何を: 画像ファイルを単一ワーカースレッドで非同期に読み込み、結果をメインスレッドでコールバックする。
なぜ: 読み込み（ディスク I/O/デコード）で描画ループを止めず、コールバックは GL を触れる
    メインスレッドで実行するため。

流れ:
    load(path, on_success, on_failure) → ワーカーがデコード → 結果キュー
    → FrameClock.tick → drain() → on_success(image) / on_failure(path, error)

リトライ・代替画像・キャンセルは行わない。失敗は on_failure に渡す（未指定なら error ログのみ）。
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from common import settings
from engine.core.scene import BackgroundImage

from ..core.tickable import Tickable

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[BackgroundImage], None]
FailureCallback = Callable[[Path, BaseException], None]
Decoder = Callable[[Path], BackgroundImage]


def decode_image(path: Path) -> BackgroundImage:
    """pyglet で画像をデコードし RGBA（下行 → 上行）の `BackgroundImage` にする。

    例外:
        FileNotFoundError: ファイルが存在しない場合。
        その他 pyglet のデコード例外はそのまま送出する。
    """
    if not path.is_file():
        raise FileNotFoundError(str(path))
    import pyglet  # 遅延 import（ヘッドレスのテストで窓を開かないため）

    img = pyglet.image.load(str(path)).get_image_data()
    data = img.get_data("RGBA", img.width * 4)
    return BackgroundImage(
        width=int(img.width), height=int(img.height), pixels=bytes(data), source=str(path)
    )


@dataclass
class _Request:
    path: Path
    on_success: Optional[SuccessCallback]
    on_failure: Optional[FailureCallback]


@dataclass
class _Result:
    request: _Request
    image: Optional[BackgroundImage] = None
    error: Optional[BaseException] = None


class ImageLoader(Tickable):
    """非同期画像ローダ（ワーカースレッド 1 本）。"""

    def __init__(self, *, decoder: Decoder | None = None) -> None:
        self._decoder: Decoder = decoder or decode_image
        self._requests: "queue.Queue[_Request | None]" = queue.Queue()
        self._results: "queue.Queue[_Result]" = queue.Queue()
        self._lock = threading.Lock()
        self._pending = 0
        self._closed = False
        self._th = threading.Thread(target=self._worker, name="ImageLoaderWorker", daemon=True)
        self._th.start()

    # --- public API ---
    def load(
        self,
        path: str | Path,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
    ) -> None:
        """読み込みを依頼する（即時に戻る）。"""
        if self._closed:
            raise RuntimeError("ImageLoader は既に close されています")
        with self._lock:
            self._pending += 1
        self._requests.put(_Request(Path(path), on_success, on_failure))
        logger.debug("image requested: %s", path)

    @property
    def pending(self) -> int:
        """コールバック未実行の依頼数。"""
        with self._lock:
            return self._pending

    def drain(self) -> int:
        """完了済みの結果についてコールバックを実行する（メインスレッドから呼ぶ）。"""
        handled = 0
        while True:
            try:
                result = self._results.get_nowait()
            except queue.Empty:
                break
            with self._lock:
                self._pending -= 1
            self._dispatch(result)
            handled += 1
        return handled

    def wait(self, timeout: float | None = None) -> bool:
        """全依頼のコールバックが終わるまで待つ。タイムアウトしたら False。"""
        if timeout is None:
            timeout = settings.get().IMAGE_LOADER_TIMEOUT
        deadline = time.monotonic() + float(timeout)
        while self.pending > 0:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            try:
                result = self._results.get(timeout=min(remaining, 0.05))
            except queue.Empty:
                continue
            with self._lock:
                self._pending -= 1
            self._dispatch(result)
        return True

    def tick(self, dt: float) -> None:
        self.drain()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._requests.put(None)

    # --- internals ---
    def _dispatch(self, result: _Result) -> None:
        req = result.request
        if result.error is None and result.image is not None:
            if req.on_success is not None:
                req.on_success(result.image)
        else:
            err = result.error or RuntimeError("unknown image load error")
            if req.on_failure is not None:
                req.on_failure(req.path, err)
            else:
                logger.error("Failed to load image at path: %s", req.path)

    def _worker(self) -> None:
        while True:
            req = self._requests.get()
            if req is None:
                break
            try:
                image = self._decoder(req.path)
            except Exception as e:
                logger.debug("image decode failed: %s", req.path, exc_info=True)
                self._results.put(_Result(req, error=e))
                continue
            self._results.put(_Result(req, image=image))


__all__ = ["ImageLoader", "decode_image"]
