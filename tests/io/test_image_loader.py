from __future__ import annotations

import logging
from pathlib import Path

import pytest

from engine.core.scene import BackgroundImage
from engine.io.image_loader import ImageLoader, decode_image


def _fake_decoder(path: Path) -> BackgroundImage:
    if path.name == "missing.png":
        raise FileNotFoundError(str(path))
    return BackgroundImage(width=1, height=1, pixels=bytes(4), source=str(path))


@pytest.fixture()
def loader():
    ld = ImageLoader(decoder=_fake_decoder)
    yield ld
    ld.close()


def test_success_callback_runs_on_wait(loader: ImageLoader) -> None:
    got: list[BackgroundImage] = []
    loader.load("a.png", got.append)
    assert loader.pending == 1
    assert loader.wait(timeout=2.0) is True
    assert loader.pending == 0
    assert len(got) == 1 and got[0].source == "a.png"


def test_failure_callback_receives_path_and_error(loader: ImageLoader) -> None:
    failures: list[tuple[Path, BaseException]] = []
    loader.load("missing.png", lambda img: None, lambda p, e: failures.append((p, e)))
    assert loader.wait(timeout=2.0)
    assert len(failures) == 1
    path, err = failures[0]
    assert path == Path("missing.png")
    assert isinstance(err, FileNotFoundError)


def test_failure_without_callback_logs_error(loader: ImageLoader, caplog) -> None:
    caplog.set_level(logging.ERROR, logger="engine.io.image_loader")
    loader.load("missing.png")
    assert loader.wait(timeout=2.0)
    assert "Failed to load image at path: missing.png" in caplog.text


def test_callbacks_are_not_run_before_drain(loader: ImageLoader) -> None:
    got: list[BackgroundImage] = []
    loader.load("b.png", got.append)
    # コールバックは drain/wait/tick を呼んだスレッドでのみ実行される
    assert got == []
    assert loader.wait(timeout=2.0)
    assert got


def test_load_after_close_raises() -> None:
    ld = ImageLoader(decoder=_fake_decoder)
    ld.close()
    ld.close()  # 2 度目は何もしない
    with pytest.raises(RuntimeError):
        ld.load("a.png")


def test_decode_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        decode_image(tmp_path / "nope.png")
