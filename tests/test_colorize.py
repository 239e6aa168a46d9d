"""Tests for the colorizer.

Tests for src.heatmap.colorize:
    - Uncovered pixels (count == 0) left untouched
    - avg = intensity / count → floor(avg * 255) table lookup
    - Index clamped when avg drifts past 1.0
    - Covered pixels always fully opaque

Run:
    pytest tests/test_colorize.py -v
"""

import numpy as np
import pytest

from src.heatmap.colorize import colorize, gradient_indices
from src.heatmap.gradient import build_gradient_table


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(scope="module")
def gray_table():
    return build_gradient_table({0.0: 'black', 1.0: 'white'})


@pytest.fixture
def output():
    out = np.zeros((2, 3, 4), dtype=np.uint8)
    out[...] = (9, 8, 7, 6)
    return out


# ============================================================================
# INDEX MAPPING
# ============================================================================

def test_gradient_indices_floor():
    idx = gradient_indices(np.array([0.0, 0.5, 0.999, 1.0]))
    assert list(idx) == [0, 127, 254, 255]


def test_gradient_indices_clamped():
    idx = gradient_indices(np.array([1.0000001, 1.5, -0.2]))
    assert list(idx) == [255, 255, 0]


# ============================================================================
# COLORIZATION
# ============================================================================

def test_uncovered_pixels_untouched(output, gray_table):
    intensity = np.ones((2, 3), dtype=np.float32)
    count = np.zeros((2, 3), dtype=np.uint16)
    colorize(output, gray_table, intensity, count)
    assert np.all(output == (9, 8, 7, 6))


def test_covered_pixels_use_average(output, gray_table):
    intensity = np.array([[0.0, 1.0, 2.0], [0.5, 3.0, 0.0]], dtype=np.float32)
    count = np.array([[1, 2, 2], [1, 3, 0]], dtype=np.uint16)
    colorize(output, gray_table, intensity, count)

    assert tuple(output[0, 0]) == tuple(gray_table[0][:3]) + (255,)
    assert tuple(output[0, 1]) == tuple(gray_table[127][:3]) + (255,)
    assert tuple(output[0, 2]) == tuple(gray_table[255][:3]) + (255,)
    assert tuple(output[1, 0]) == tuple(gray_table[127][:3]) + (255,)
    assert tuple(output[1, 1]) == tuple(gray_table[255][:3]) + (255,)
    # count == 0 stays as it was
    assert tuple(output[1, 2]) == (9, 8, 7, 6)


def test_alpha_forced_opaque(output):
    table = build_gradient_table({0.0: (10, 20, 30, 0), 1.0: (10, 20, 30, 0)})
    intensity = np.full((2, 3), 0.3, dtype=np.float32)
    count = np.ones((2, 3), dtype=np.uint16)
    colorize(output, table, intensity, count)
    assert np.all(output[..., 3] == 255)
    assert np.all(output[..., :3] == (10, 20, 30))


def test_average_above_one_clamped(output, gray_table):
    intensity = np.full((2, 3), 1.02, dtype=np.float32)
    count = np.ones((2, 3), dtype=np.uint16)
    colorize(output, gray_table, intensity, count)
    assert np.all(output[..., :3] == 255)


def test_returns_output(output, gray_table):
    count = np.ones((2, 3), dtype=np.uint16)
    result = colorize(output, gray_table, np.zeros((2, 3), dtype=np.float32), count)
    assert result is output


def test_shape_mismatch_raises(output, gray_table):
    with pytest.raises(ValueError, match="Buffer shapes"):
        colorize(output, gray_table, np.zeros((3, 2), dtype=np.float32),
                 np.zeros((3, 2), dtype=np.uint16))
