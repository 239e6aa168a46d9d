"""Tests for the gradient lookup table builder.

Tests for src.heatmap.gradient:
    - Black→white ramp endpoints and midpoint
    - Default stops: flat fill below the lowest stop, exact stop colors
    - Stop order independence
    - Tuple colors, single-stop tables
    - Unknown color names fail

Run:
    pytest tests/test_gradient.py -v
"""

import numpy as np
import pytest

from src.heatmap.gradient import DEFAULT_GRADIENT, TABLE_SIZE, build_gradient_table


def test_table_shape_and_dtype():
    table = build_gradient_table()
    assert table.shape == (TABLE_SIZE, 4)
    assert table.dtype == np.uint8


def test_black_white_ramp():
    table = build_gradient_table({0.0: 'black', 1.0: 'white'})
    assert tuple(table[0]) == (0, 0, 0, 255)
    assert tuple(table[255]) == (255, 255, 255, 255)
    assert np.all(np.abs(table[128, :3].astype(int) - 128) <= 1)
    assert np.all(table[:, 3] == 255)


def test_black_white_ramp_is_monotone():
    table = build_gradient_table({0.0: 'black', 1.0: 'white'})
    assert np.all(np.diff(table[:, 0].astype(int)) >= 0)


def test_default_gradient_stops():
    assert DEFAULT_GRADIENT == {0.4: 'blue', 0.6: 'cyan', 0.7: 'lime', 0.8: 'yellow', 1.0: 'red'}


def test_default_gradient_fills_below_lowest_stop():
    table = build_gradient_table()
    # Everything below 0.4 takes the lowest stop's color
    assert tuple(table[0]) == (0, 0, 255, 255)
    assert tuple(table[100]) == (0, 0, 255, 255)


def test_default_gradient_hits_stop_colors():
    table = build_gradient_table()
    assert tuple(table[255]) == (255, 0, 0, 255)
    assert np.all(np.abs(table[153].astype(int) - [0, 255, 255, 255]) <= 2)   # 0.6 cyan
    assert np.all(np.abs(table[204].astype(int) - [255, 255, 0, 255]) <= 2)   # 0.8 yellow


def test_stop_order_irrelevant():
    stops = {1.0: 'red', 0.0: 'blue', 0.5: 'lime'}
    reordered = {0.0: 'blue', 0.5: 'lime', 1.0: 'red'}
    assert np.array_equal(build_gradient_table(stops), build_gradient_table(reordered))


def test_tuple_and_hex_colors():
    table = build_gradient_table({0.0: (10, 20, 30), 1.0: '#ff000080'})
    assert tuple(table[0]) == (10, 20, 30, 255)
    assert tuple(table[255]) == (255, 0, 0, 128)


def test_single_stop_is_constant():
    table = build_gradient_table({0.5: 'lime'})
    assert np.all(table == np.array([0, 255, 0, 255], dtype=np.uint8))


def test_table_is_read_only():
    table = build_gradient_table()
    with pytest.raises(ValueError):
        table[0, 0] = 1


def test_unknown_color_raises():
    with pytest.raises(ValueError):
        build_gradient_table({0.0: 'not-a-color', 1.0: 'red'})
