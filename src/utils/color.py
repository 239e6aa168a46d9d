"""Color resolution and RGBA helpers.

Provides:
    - resolve_color(): CSS name / hex string / tuple → RGBA uint8 quadruple
    - resolve_colors(): vectorized form returning an (N, 4) array

Used by:
    - Gradient table builder: resolving gradient stop colors
    - Config validation: rejecting unknown color names early

Invariants:
    - All colors are 8-bit sRGB, channel order R, G, B, A
    - Alpha defaults to 255 when not given
"""

from typing import Iterable, Sequence, Tuple, Union

import numpy as np
from PIL import ImageColor

ColorLike = Union[str, Sequence[int]]


def resolve_color(color: ColorLike) -> Tuple[int, int, int, int]:
    """Resolve a color spec to an RGBA tuple.

    Parameters
    ----------
    color : str or sequence of int
        CSS color name ("blue", "lime"), hex string ("#00ff00", "#00ff0080"),
        functional notation understood by PIL ("rgb(0, 255, 0)"),
        or an (R, G, B) / (R, G, B, A) tuple with channels in [0, 255]

    Returns
    -------
    tuple of int
        (R, G, B, A), each in [0, 255]

    Raises
    ------
    ValueError
        If the name is unknown or the tuple has the wrong length / range
    """
    if isinstance(color, str):
        # PIL raises ValueError for unknown names
        return tuple(ImageColor.getcolor(color, "RGBA"))

    channels = tuple(int(c) for c in color)
    if len(channels) == 3:
        channels = channels + (255,)
    if len(channels) != 4:
        raise ValueError(f"Expected RGB or RGBA tuple, got {len(channels)} channels: {color}")
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"Color channels must be in [0, 255], got {color}")
    return channels


def resolve_colors(colors: Iterable[ColorLike]) -> np.ndarray:
    """Resolve several colors at once.

    Returns
    -------
    np.ndarray
        (N, 4) uint8 RGBA rows, in input order
    """
    rows = [resolve_color(c) for c in colors]
    if not rows:
        return np.zeros((0, 4), dtype=np.uint8)
    return np.asarray(rows, dtype=np.uint8)
