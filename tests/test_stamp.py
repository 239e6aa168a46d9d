"""Tests for the blurred circular stamp.

Tests for src.heatmap.stamp:
    - Geometry: side = 2 * (radius + blur), offset = radius + blur
    - Radial symmetry (transpose and flips)
    - Peak ≈ 1 at center, ≈ 0 at the border, monotone falloff
    - Immutability of the alpha raster
    - Hard disk when blur == 0

Run:
    pytest tests/test_stamp.py -v
"""

import numpy as np
import pytest

from src.heatmap.stamp import DEFAULT_BLUR, DEFAULT_RADIUS, Stamp, build_stamp


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(scope="module")
def default_stamp():
    return build_stamp()


# ============================================================================
# GEOMETRY
# ============================================================================

def test_defaults():
    assert DEFAULT_RADIUS == 25
    assert DEFAULT_BLUR == 15


def test_shape_and_offset(default_stamp):
    assert isinstance(default_stamp, Stamp)
    assert default_stamp.radius == 25
    assert default_stamp.blur == 15
    assert default_stamp.offset == 40
    assert default_stamp.side == 80
    assert default_stamp.alpha.shape == (80, 80)
    assert default_stamp.alpha.dtype == np.float32


@pytest.mark.parametrize("radius,blur", [(5, 3), (10, 0), (12, 7)])
def test_side_matches_radius_plus_blur(radius, blur):
    stamp = build_stamp(radius, blur)
    assert stamp.alpha.shape == (2 * (radius + blur), 2 * (radius + blur))


@pytest.mark.parametrize("radius,blur,expected", [
    (10.6, 4.7, (11, 5)),
    (10.4, 4.2, (10, 4)),
    (3.9, 0.1, (4, 0)),
])
def test_fractional_sizes_round(radius, blur, expected):
    stamp = build_stamp(radius, blur)
    assert (stamp.radius, stamp.blur) == expected
    assert stamp.side == 2 * sum(expected)
    assert stamp.alpha.shape == (stamp.side, stamp.side)


# ============================================================================
# PROFILE
# ============================================================================

def test_radially_symmetric(default_stamp):
    a = default_stamp.alpha
    assert np.allclose(a, a.T, atol=1e-5)
    assert np.allclose(a, a[::-1, :], atol=1e-5)
    assert np.allclose(a, a[:, ::-1], atol=1e-5)


def test_peak_at_center(default_stamp):
    a = default_stamp.alpha
    c = default_stamp.offset
    assert a[c - 1:c + 1, c - 1:c + 1].min() > 0.95
    assert a.max() <= 1.0
    assert a.min() >= 0.0


def test_falls_to_zero_at_border(default_stamp):
    a = default_stamp.alpha
    border = np.concatenate([a[0, :], a[-1, :], a[:, 0], a[:, -1]])
    assert border.max() < 0.05, f"Border alpha too high: {border.max():.4f}"
    assert a[0, 0] < 1e-3


def test_monotone_falloff(default_stamp):
    c = default_stamp.offset
    row = default_stamp.alpha[c, c:]
    assert np.all(np.diff(row) <= 1e-6), "Alpha should not increase away from center"


def test_hard_disk_without_blur():
    stamp = build_stamp(10, 0)
    a = stamp.alpha
    assert a.shape == (20, 20)
    assert a[10, 10] == pytest.approx(1.0)
    assert a[0, 0] == 0.0
    assert np.allclose(a, a.T, atol=1e-6)


def test_alpha_is_read_only(default_stamp):
    with pytest.raises(ValueError):
        default_stamp.alpha[0, 0] = 1.0


def test_deterministic():
    assert np.array_equal(build_stamp(8, 4).alpha, build_stamp(8, 4).alpha)
