from __future__ import annotations

import pytest

from api.sketch_runner.utils import (
    DEFAULT_WINDOW_SIZE,
    button_name,
    resolve_caption,
    resolve_fps,
    resolve_line_thickness,
    resolve_window_size,
)


@pytest.mark.parametrize(
    "requested,cfg,expected",
    [
        (None, None, 60),
        (30, {"window": {"fps": 24}}, 30),
        (None, {"window": {"fps": 24}}, 24),
        (0, None, 1),
        (None, {"window": {"fps": "fast"}}, 60),
    ],
)
def test_resolve_fps(requested, cfg, expected) -> None:  # noqa: ANN001
    assert resolve_fps(requested, cfg) == expected


def test_window_size_priority() -> None:
    cfg = {"window": {"width": 1000, "height": 500}}
    assert resolve_window_size("800x600", (600, 600), cfg) == (800, 600)
    assert resolve_window_size((640, 480), (600, 600), cfg) == (640, 480)
    assert resolve_window_size(None, (600, 600), cfg) == (600, 600)
    assert resolve_window_size(None, None, cfg) == (1000, 500)
    assert resolve_window_size(None, None, None) == DEFAULT_WINDOW_SIZE


@pytest.mark.parametrize("bad", ["800", "0x600", "axb", (0, 10)])
def test_window_size_invalid_argument(bad) -> None:  # noqa: ANN001
    with pytest.raises(ValueError):
        resolve_window_size(bad)


def test_window_size_invalid_config_falls_back() -> None:
    assert resolve_window_size(None, None, {"window": {"width": "wide"}}) == DEFAULT_WINDOW_SIZE
    assert resolve_window_size(None, None, {"window": {"width": -1, "height": 5}}) == DEFAULT_WINDOW_SIZE


def test_line_thickness() -> None:
    assert resolve_line_thickness(0.01) == 0.01
    assert resolve_line_thickness(None, {"renderer": {"line_thickness": 0.002}}) == 0.002
    assert resolve_line_thickness(None, {}) is None
    assert resolve_line_thickness(None, {"renderer": {"line_thickness": "thick"}}) is None


def test_caption() -> None:
    assert resolve_caption("Noise crosses") == "Noise Gallery - Noise crosses"
    assert resolve_caption("", {"window": {"caption": "X"}}) == "X"


def test_button_name_prefers_left() -> None:
    bits = {"left": 1, "right": 4, "middle": 2}
    assert button_name(1 | 4, **bits) == "left"
    assert button_name(4, **bits) == "right"
    assert button_name(2, **bits) == "middle"
    assert button_name(0, **bits) is None
