from __future__ import annotations

import pytest

from util.color import (
    hex_int_to_rgba,
    hsb_to_rgba,
    normalize_color,
    parse_hex_color_str,
    to_u8_rgba,
    with_alpha,
)


def _approx_tuple(t, p=1e-6):
    return tuple(round(v, 6) for v in t)


def test_parse_hex_color_valid_variants() -> None:
    expected = (round(0x77 / 255.0, 6), round(0xC9 / 255.0, 6), round(0x8D / 255.0, 6), 1.0)
    assert _approx_tuple(parse_hex_color_str("#77C98D")) == expected
    assert _approx_tuple(parse_hex_color_str("77c98d")) == expected
    assert _approx_tuple(parse_hex_color_str("0x77C98DCC"))[3] == round(0xCC / 255.0, 6)


def test_parse_hex_color_invalid() -> None:
    with pytest.raises(ValueError):
        parse_hex_color_str("#123")
    with pytest.raises(ValueError):
        parse_hex_color_str("not-a-color")


def test_hex_int() -> None:
    assert hex_int_to_rgba(0x333333)[:3] == pytest.approx((0.2, 0.2, 0.2))
    assert normalize_color(0x000000) == (0.0, 0.0, 0.0, 1.0)
    with pytest.raises(ValueError):
        hex_int_to_rgba(0x1000000)


def test_normalize_color_tuples() -> None:
    assert _approx_tuple(normalize_color((0.1, 0.2, 0.3))) == (0.1, 0.2, 0.3, 1.0)
    # 0–1 を超える成分があれば 0–255 とみなす
    assert _approx_tuple(normalize_color((255, 252, 247))) == (
        1.0,
        round(252 / 255.0, 6),
        round(247 / 255.0, 6),
        1.0,
    )


@pytest.mark.parametrize("bad", [None, True, (1, 2), ("a", "b", "c")])
def test_normalize_color_rejects(bad) -> None:  # noqa: ANN001
    with pytest.raises(ValueError):
        normalize_color(bad)


def test_hsb_and_alpha() -> None:
    assert _approx_tuple(hsb_to_rgba(120, 100, 100)) == (0.0, 1.0, 0.0, 1.0)
    assert with_alpha(0xFFFFFF, 0.5) == (1.0, 1.0, 1.0, 0.5)
    assert to_u8_rgba("#FF00FF80") == (255, 0, 255, 128)
