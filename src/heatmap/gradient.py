"""Gradient lookup table: sparse color stops → dense 256-entry RGBA table.

Row j of the table is the color for normalized intensity j / 255.
"""

import logging
from typing import Mapping

import numpy as np

from src.utils import color as color_utils

logger = logging.getLogger(__name__)

TABLE_SIZE = 256

DEFAULT_GRADIENT = {
    0.4: 'blue',
    0.6: 'cyan',
    0.7: 'lime',
    0.8: 'yellow',
    1.0: 'red',
}


def build_gradient_table(
    stops: Mapping[float, color_utils.ColorLike] = DEFAULT_GRADIENT
) -> np.ndarray:
    """Rasterize gradient stops into a lookup table.

    Parameters
    ----------
    stops : Mapping[float, ColorLike]
        Stop position in [0, 1] → color (name, hex, or RGB(A) tuple).
        Insertion order is irrelevant.

    Returns
    -------
    np.ndarray
        (256, 4) uint8 RGBA, read-only

    Notes
    -----
    Linear interpolation per RGBA channel. Positions below the lowest stop
    take its color, positions above the highest stop take that one's color.
    """
    positions = sorted(float(p) for p in stops)
    by_pos = {float(p): c for p, c in stops.items()}
    colors = color_utils.resolve_colors(by_pos[p] for p in positions).astype(np.float32)

    samples = np.arange(TABLE_SIZE, dtype=np.float64) / (TABLE_SIZE - 1)
    table = np.empty((TABLE_SIZE, 4), dtype=np.float32)
    for ch in range(4):
        table[:, ch] = np.interp(samples, positions, colors[:, ch])

    table = np.clip(np.rint(table), 0, 255).astype(np.uint8)
    table.setflags(write=False)

    logger.debug(f"Built gradient table from {len(positions)} stops")
    return table
