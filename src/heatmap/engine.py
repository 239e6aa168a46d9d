"""Heatmap engine: fluent configuration plus the atomic draw pass.

Architecture:
    points ──► render_points (stamp) ──► scratch surface alpha
           ──► IntensityAccumulator (sum + count)
           ──► colorize (gradient table) ──► bound surface
           ──► accumulator reset

Usage:
    from src.heatmap import NumpySurface, create

    surface = NumpySurface(300, 200)
    (create(surface)
        .set_points([(10, 20, 0.5), (40, 60, 1.0)])
        .set_max(1.0)
        .configure_stamp(radius=20, blur=10)
        .draw())
    rgba = surface.pixels

State:
    Idle (buffers zero) → Accumulating (inside draw) → Idle.
    A draw call is atomic from the caller's point of view; buffers are zero
    whenever it returns. Not reentrant and not thread-safe: one engine per
    thread.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from src.utils import color as color_utils
from src.utils import profiler, validators

from .accumulator import IntensityAccumulator
from .colorize import colorize
from .gradient import DEFAULT_GRADIENT, build_gradient_table
from .renderer import DEFAULT_MIN_OPACITY, render_points
from .stamp import DEFAULT_BLUR, DEFAULT_RADIUS, Stamp, build_stamp
from .surface import NumpySurface, RasterSurface, SurfaceFactory

logger = logging.getLogger(__name__)

Point = Tuple[float, float, float]


def _log_timing(name: str, elapsed: float) -> None:
    logger.debug(f"{name}: {elapsed * 1000:.2f} ms")


class HeatmapEngine:
    """Accumulating heatmap renderer bound to one surface.

    Parameters
    ----------
    surface : RasterSurface
        Output raster; must expose width, height and the drawing context
    surface_factory : SurfaceFactory, optional
        Builds the per-draw scratch surface as factory(width, height).
        Defaults to NumpySurface.

    Notes
    -----
    Configuration methods mutate the engine and return it, so calls chain in
    the order they are applied.
    """

    DEFAULT_RADIUS = DEFAULT_RADIUS
    DEFAULT_BLUR = DEFAULT_BLUR
    DEFAULT_GRADIENT = DEFAULT_GRADIENT
    DEFAULT_MIN_OPACITY = DEFAULT_MIN_OPACITY

    def __init__(
        self,
        surface: RasterSurface,
        surface_factory: Optional[SurfaceFactory] = None
    ):
        self._surface = surface
        self._surface_factory = surface_factory or NumpySurface

        self._width = int(surface.width)
        self._height = int(surface.height)

        self._max = 1.0
        self._min_opacity = self.DEFAULT_MIN_OPACITY
        self._points: List[Point] = []

        self._stamp: Optional[Stamp] = None
        self._gradient: Optional[np.ndarray] = None

        self._accumulator = IntensityAccumulator(self._width, self._height)
        self.draw_timer = profiler.TimerAccumulator("heatmap.draw")

        logger.info(f"HeatmapEngine initialized: surface={self._width}x{self._height}")

    def __repr__(self) -> str:
        return (
            f"HeatmapEngine({self._width}x{self._height}, "
            f"points={len(self._points)}, max={self._max})"
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    @property
    def max(self) -> float:
        return self._max

    @property
    def min_opacity(self) -> float:
        return self._min_opacity

    @property
    def stamp(self) -> Optional[Stamp]:
        """Current stamp, None until configured or first drawn."""
        return self._stamp

    @property
    def gradient_table(self) -> Optional[np.ndarray]:
        """Current (256, 4) lookup, None until configured or first drawn."""
        return self._gradient

    @property
    def accumulator(self) -> IntensityAccumulator:
        """Persistent buffers; inspect through its read-only views."""
        return self._accumulator

    # ------------------------------------------------------------------
    # Fluent configuration
    # ------------------------------------------------------------------

    def set_points(self, points: Iterable[Sequence[float]]) -> 'HeatmapEngine':
        """Replace the point set; iteration order becomes render order."""
        self._points = [self._as_point(p) for p in points]
        return self

    def add_point(self, point: Sequence[float]) -> 'HeatmapEngine':
        self._points.append(self._as_point(point))
        return self

    def clear_points(self) -> 'HeatmapEngine':
        self._points = []
        return self

    def set_max(self, value: float = 1.0) -> 'HeatmapEngine':
        """Set the weight that maps to full opacity; must be positive."""
        value = float(value)
        if not value > 0.0:
            raise ValueError(f"max must be > 0, got {value}")
        self._max = value
        return self

    def configure_stamp(
        self,
        radius: int = DEFAULT_RADIUS,
        blur: int = DEFAULT_BLUR
    ) -> 'HeatmapEngine':
        """Rebuild the point stamp; nothing else is invalidated."""
        self._stamp = build_stamp(radius, blur)
        logger.info(f"Stamp configured: radius={radius} blur={blur}")
        return self

    def configure_gradient(
        self,
        stops: Mapping[float, color_utils.ColorLike] = DEFAULT_GRADIENT
    ) -> 'HeatmapEngine':
        """Rebuild the gradient lookup table from stop → color pairs."""
        self._gradient = build_gradient_table(stops)
        logger.info(f"Gradient configured: {len(stops)} stops")
        return self

    def resize_to_surface(self) -> 'HeatmapEngine':
        """Re-read the surface size and reallocate the accumulator buffers."""
        self._width = int(self._surface.width)
        self._height = int(self._surface.height)
        self._accumulator.resize(self._width, self._height)
        logger.info(f"Resized to surface: {self._width}x{self._height}")
        return self

    def configure(self, config: validators.HeatmapConfigV1) -> 'HeatmapEngine':
        """Apply a validated config (stamp, gradient, max, min_opacity)."""
        self.configure_stamp(config.stamp.radius, config.stamp.blur)
        self.configure_gradient(config.gradient if config.gradient is not None else self.DEFAULT_GRADIENT)
        self.set_max(config.max)
        self._min_opacity = config.min_opacity
        return self

    @classmethod
    def from_config(
        cls,
        surface: RasterSurface,
        config: Union[str, Path, validators.HeatmapConfigV1],
        surface_factory: Optional[SurfaceFactory] = None
    ) -> 'HeatmapEngine':
        """Build an engine from a heatmap.v1 config model or YAML path."""
        if not isinstance(config, validators.HeatmapConfigV1):
            config = validators.load_heatmap_config(config)
        return cls(surface, surface_factory).configure(config)

    # ------------------------------------------------------------------
    # Draw pass
    # ------------------------------------------------------------------

    def draw(self, min_opacity: Optional[float] = None) -> 'HeatmapEngine':
        """Render, accumulate, colorize and reset in one call.

        Parameters
        ----------
        min_opacity : float, optional
            Opacity floor for this pass; None uses the configured default
            (0.05 unless set through configure())

        Returns
        -------
        HeatmapEngine
            self
        """
        if self._stamp is None:
            self.configure_stamp(self.DEFAULT_RADIUS)
        if self._gradient is None:
            self.configure_gradient(self.DEFAULT_GRADIENT)
        if min_opacity is None:
            min_opacity = self._min_opacity

        w, h = self._width, self._height

        with self.draw_timer.measure():
            scratch = self._surface_factory(w, h)
            scratch.clear_rect(0, 0, w, h)

            try:
                with profiler.timer("render", sink=_log_timing):
                    n = render_points(scratch, self._stamp, self._points, self._max, min_opacity)

                with profiler.timer("accumulate", sink=_log_timing):
                    alpha = scratch.get_image_data(0, 0, w, h)[..., 3]
                    self._accumulator.accumulate(alpha)

                # Bound surface is only touched once accumulation has succeeded
                with profiler.timer("colorize", sink=_log_timing):
                    self._surface.clear_rect(0, 0, w, h)
                    colored = self._surface.get_image_data(0, 0, w, h)
                    colorize(
                        colored, self._gradient,
                        self._accumulator.intensity, self._accumulator.count
                    )
                    self._surface.put_image_data(colored, 0, 0)
            finally:
                self._accumulator.reset()

        logger.debug(f"Drew {n} points on {w}x{h} (min_opacity={min_opacity})")
        return self

    @staticmethod
    def _as_point(p: Sequence[float]) -> Point:
        x, y, weight = p
        return (float(x), float(y), float(weight))
