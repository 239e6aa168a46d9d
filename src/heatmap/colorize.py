"""Colorizer: averaged intensity → gradient color, fully opaque.

Coverage decides visibility (count == 0 pixels are skipped); once a pixel is
covered its intensity is expressed only through the gradient hue, never
through alpha.
"""

import numpy as np

from .gradient import TABLE_SIZE


def gradient_indices(avg: np.ndarray) -> np.ndarray:
    """Map averaged intensity to table rows: floor(avg * 255) clamped to [0, 255].

    The clamp guards against float accumulation pushing avg slightly past 1.0.
    """
    j = np.floor(avg * (TABLE_SIZE - 1))
    return np.clip(j, 0, TABLE_SIZE - 1).astype(np.intp)


def colorize(
    output: np.ndarray,
    gradient_table: np.ndarray,
    intensity: np.ndarray,
    count: np.ndarray
) -> np.ndarray:
    """Write gradient colors for every covered pixel.

    Parameters
    ----------
    output : np.ndarray
        (H, W, 4) uint8 RGBA, modified in place
    gradient_table : np.ndarray
        (256, 4) uint8 RGBA lookup
    intensity : np.ndarray
        (H, W) float intensity sums
    count : np.ndarray
        (H, W) overlap counts

    Returns
    -------
    np.ndarray
        `output`, for chaining

    Raises
    ------
    ValueError
        If buffer shapes disagree with the output raster
    """
    if intensity.shape != output.shape[:2] or count.shape != output.shape[:2]:
        raise ValueError(
            f"Buffer shapes {intensity.shape}/{count.shape} != output "
            f"{output.shape[:2]}"
        )

    covered = count > 0
    if not covered.any():
        return output

    avg = intensity[covered] / count[covered]
    colors = gradient_table[gradient_indices(avg)]

    output[covered, :3] = colors[:, :3]
    output[covered, 3] = 255
    return output
