from __future__ import annotations

import numpy as np
import pytest

pytest.importorskip("numba")

from effects.noise import ValueNoise, fade, improved_noise, improved_noise_points  # noqa: E402


def test_improved_noise_is_zero_on_lattice() -> None:
    for p in [(0, 0, 0), (1, 2, 3), (10, -4, 7)]:
        assert improved_noise(*p) == pytest.approx(0.0, abs=1e-12)


def test_improved_noise_range_and_broadcast() -> None:
    rng = np.random.default_rng(0)
    xs = rng.uniform(-50, 50, 2000)
    zs = rng.uniform(-50, 50, 2000)
    vals = improved_noise_points(xs, 0.37, zs)
    assert vals.shape == (2000,)
    assert np.all(np.abs(vals) <= 1.0 + 1e-9)
    assert vals.std() > 0.05


def test_improved_noise_points_matches_scalar() -> None:
    xs = np.array([0.1, 1.7, -3.2])
    pts = improved_noise_points(xs, 0.5, 2.25)
    single = [improved_noise(x, 0.5, 2.25) for x in xs]
    assert np.allclose(pts, single)


def test_fade_endpoints() -> None:
    assert fade(0.0) == 0.0
    assert fade(1.0) == pytest.approx(1.0)
    assert fade(0.5) == pytest.approx(0.5)


def test_value_noise_range() -> None:
    n = ValueNoise(seed=3)
    grid = n.noise_grid(np.linspace(0, 20, 64), np.linspace(0, 20, 64), 0.5)
    assert grid.shape == (64, 64)
    assert np.all(grid >= 0.0) and np.all(grid < 1.0)


def test_value_noise_is_deterministic_per_seed() -> None:
    a = ValueNoise(seed=42)
    b = ValueNoise(seed=42)
    c = ValueNoise(seed=43)
    xs = np.linspace(0, 5, 50)
    assert np.array_equal(a.noise_points(xs, 1.5), b.noise_points(xs, 1.5))
    assert not np.array_equal(a.noise_points(xs, 1.5), c.noise_points(xs, 1.5))


def test_value_noise_reseed_restores_sequence() -> None:
    n = ValueNoise(seed=1)
    first = n.noise(0.3, 0.7)
    n.noise_seed(99)
    n.noise_seed(1)
    assert n.noise(0.3, 0.7) == first


def test_value_noise_negative_coordinates_mirror() -> None:
    n = ValueNoise(seed=5)
    assert n.noise(-1.25, -0.5) == n.noise(1.25, 0.5)


def test_value_noise_single_octave_on_lattice_is_half_table() -> None:
    n = ValueNoise(seed=7, octaves=1)
    assert n.noise(0.0, 0.0, 0.0) == pytest.approx(0.5 * n._table[0])


def test_value_noise_points_match_scalar_and_call() -> None:
    n = ValueNoise(seed=11)
    xs = np.array([0.0, 0.25, 3.5])
    assert np.allclose(n.noise_points(xs, 2.0), [n(x, 2.0) for x in xs])


@pytest.mark.parametrize("octaves,falloff", [(0, 0.5), (4, 0.0), (2, -1.0)])
def test_noise_detail_rejects_invalid(octaves, falloff) -> None:  # noqa: ANN001
    with pytest.raises(ValueError):
        ValueNoise(seed=0, octaves=octaves, falloff=falloff)
