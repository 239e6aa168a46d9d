"""Point renderer: composites one stamp per weighted point onto a scratch surface.

Within a pass overlapping stamps are alpha-composited ("over"), so the
scratch alpha saturates at full opacity rather than summing. Summation only
happens across passes, in the accumulator.
"""

import logging
from typing import Iterable, Sequence

from .stamp import Stamp
from .surface import RasterSurface

logger = logging.getLogger(__name__)

DEFAULT_MIN_OPACITY = 0.05


def point_intensity(weight: float, max_value: float, min_opacity: float = DEFAULT_MIN_OPACITY) -> float:
    """Normalize a point weight into a stamp opacity.

    Returns clamp(weight / max_value, min_opacity, 1.0). max_value must be
    positive; HeatmapEngine.set_max enforces it.
    """
    return min(max(weight / max_value, min_opacity), 1.0)


def render_points(
    scratch: RasterSurface,
    stamp: Stamp,
    points: Iterable[Sequence[float]],
    max_value: float = 1.0,
    min_opacity: float = DEFAULT_MIN_OPACITY
) -> int:
    """Stamp every point onto the scratch surface, in order.

    Parameters
    ----------
    scratch : RasterSurface
        Alpha target; only this surface is mutated
    stamp : Stamp
        Shared footprint
    points : iterable of (x, y, weight)
        Later points composite over earlier ones
    max_value : float
        Weight normalization maximum
    min_opacity : float
        Opacity floor for low or non-positive weights

    Returns
    -------
    int
        Number of points drawn
    """
    n = 0
    offset = stamp.offset
    for x, y, weight in points:
        scratch.draw_image(
            stamp.alpha,
            x - offset,
            y - offset,
            global_alpha=point_intensity(weight, max_value, min_opacity)
        )
        n += 1
    return n
