"""Accumulating heatmap renderer.

Turns weighted 2D points into colorized RGBA pixels:
    - stamp: blurred circular influence footprint per point
    - gradient: stop → color pairs rasterized into a 256-entry lookup
    - renderer: per-point opacity + "over" compositing onto a scratch surface
    - accumulator: persistent per-pixel intensity sum and pass count
    - colorize: average intensity → gradient color, fully opaque
    - engine: fluent HeatmapEngine tying the pass together

Usage:
    from src.heatmap import NumpySurface, create

    surface = NumpySurface(256, 256)
    create(surface).set_points(points).set_max(10).draw()
"""

from typing import Optional

from .accumulator import IntensityAccumulator
from .colorize import colorize
from .engine import HeatmapEngine
from .gradient import DEFAULT_GRADIENT, build_gradient_table
from .renderer import point_intensity, render_points
from .stamp import Stamp, build_stamp
from .surface import NumpySurface, RasterSurface, SurfaceFactory


def create(
    surface: RasterSurface,
    surface_factory: Optional[SurfaceFactory] = None
) -> HeatmapEngine:
    """Bind a new engine to `surface`."""
    return HeatmapEngine(surface, surface_factory)


__all__ = [
    'DEFAULT_GRADIENT',
    'HeatmapEngine',
    'IntensityAccumulator',
    'NumpySurface',
    'RasterSurface',
    'Stamp',
    'SurfaceFactory',
    'build_gradient_table',
    'build_stamp',
    'colorize',
    'create',
    'point_intensity',
    'render_points',
]
