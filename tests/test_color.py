"""Test color resolution helpers.

Tests for src.utils.color:
    - CSS names and hex strings → RGBA
    - RGB tuples get opaque alpha, RGBA tuples pass through
    - Bad names / lengths / ranges raise ValueError

Run:
    pytest tests/test_color.py -v
"""

import numpy as np
import pytest

from src.utils import color


@pytest.mark.parametrize("spec,expected", [
    ('blue', (0, 0, 255, 255)),
    ('cyan', (0, 255, 255, 255)),
    ('lime', (0, 255, 0, 255)),
    ('yellow', (255, 255, 0, 255)),
    ('red', (255, 0, 0, 255)),
    ('#102030', (16, 32, 48, 255)),
    ('#10203040', (16, 32, 48, 64)),
    ((1, 2, 3), (1, 2, 3, 255)),
    ([1, 2, 3, 4], (1, 2, 3, 4)),
])
def test_resolve_color(spec, expected):
    assert color.resolve_color(spec) == expected


@pytest.mark.parametrize("bad", ['definitely-not-a-color', (1, 2), (1, 2, 3, 4, 5), (0, 0, 300)])
def test_resolve_color_rejects(bad):
    with pytest.raises(ValueError):
        color.resolve_color(bad)


def test_resolve_colors_rows():
    rows = color.resolve_colors(['black', (255, 255, 255)])
    assert rows.dtype == np.uint8
    assert rows.tolist() == [[0, 0, 0, 255], [255, 255, 255, 255]]


def test_resolve_colors_empty():
    assert color.resolve_colors([]).shape == (0, 4)
