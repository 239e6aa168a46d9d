"""Raster surfaces the heatmap engine draws on.

The engine only needs a small 2D-context-like capability set:
    - clear a rectangle to transparent
    - composite an image at an offset with a global alpha ("over" blending)
    - read back a rectangle of RGBA pixels
    - write RGBA pixels back

RasterSurface describes that contract; NumpySurface implements it on an
in-memory (H, W, 4) uint8 array and is the default scratch surface.

Invariants:
    - Pixels are straight (non-premultiplied) 8-bit RGBA
    - Out-of-bounds regions are clipped, never an error
    - Fractional draw offsets snap to the nearest pixel
"""

import logging
from pathlib import Path
from typing import Callable, Protocol, Union, runtime_checkable

import numpy as np

from src.utils import fs

logger = logging.getLogger(__name__)


@runtime_checkable
class RasterSurface(Protocol):
    """Minimal drawing context the engine renders through."""

    width: int
    height: int

    def clear_rect(self, x: int, y: int, w: int, h: int) -> None: ...

    def draw_image(self, image: np.ndarray, x: float, y: float, global_alpha: float = 1.0) -> None: ...

    def get_image_data(self, x: int, y: int, w: int, h: int) -> np.ndarray: ...

    def put_image_data(self, data: np.ndarray, x: int, y: int) -> None: ...


SurfaceFactory = Callable[[int, int], RasterSurface]


def _clip_span(start: int, length: int, limit: int):
    """Intersect [start, start+length) with [0, limit).

    Returns (dst_lo, dst_hi, src_lo, src_hi); empty when dst_hi <= dst_lo.
    """
    dst_lo = max(0, start)
    dst_hi = min(limit, start + length)
    return dst_lo, dst_hi, dst_lo - start, dst_hi - start


class NumpySurface:
    """In-memory RGBA raster with canvas-like drawing operations.

    Attributes
    ----------
    width, height : int
        Raster size in pixels
    pixels : np.ndarray
        Backing store, shape (height, width, 4), uint8, straight alpha
    """

    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros((self.height, self.width, 4), dtype=np.uint8)

    def __repr__(self) -> str:
        return f"NumpySurface({self.width}x{self.height})"

    def resize(self, width: int, height: int) -> None:
        """Reallocate as a transparent raster of the new size."""
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros((self.height, self.width, 4), dtype=np.uint8)

    def clear_rect(self, x: int, y: int, w: int, h: int) -> None:
        """Set a rectangle to transparent black."""
        y0, y1, _, _ = _clip_span(int(y), int(h), self.height)
        x0, x1, _, _ = _clip_span(int(x), int(w), self.width)
        if y1 > y0 and x1 > x0:
            self.pixels[y0:y1, x0:x1] = 0

    def draw_image(
        self,
        image: np.ndarray,
        x: float,
        y: float,
        global_alpha: float = 1.0
    ) -> None:
        """Composite an image over the surface at (x, y).

        Parameters
        ----------
        image : np.ndarray
            Either an (h, w) float alpha mask in [0, 1] (black ink, as used by
            stamps) or an (h, w, 4) uint8 RGBA image
        x, y : float
            Top-left offset in pixels, may be negative or fractional
        global_alpha : float
            Uniform opacity multiplier in [0, 1]

        Raises
        ------
        ValueError
            If image is neither 2-D nor (h, w, 4)

        Notes
        -----
        Standard source-over: a_out = a_src + a_dst * (1 - a_src), so
        repeated draws saturate at full opacity instead of summing past it.
        """
        if image.ndim == 2:
            src_a = image.astype(np.float32, copy=False)
            src_rgb = None
        elif image.ndim == 3 and image.shape[2] == 4:
            src_a = image[..., 3].astype(np.float32) / 255.0
            src_rgb = image[..., :3].astype(np.float32)
        else:
            raise ValueError(f"Expected (h, w) alpha or (h, w, 4) RGBA image, got {image.shape}")

        ox = int(np.floor(x + 0.5))
        oy = int(np.floor(y + 0.5))
        ih, iw = src_a.shape
        y0, y1, sy0, sy1 = _clip_span(oy, ih, self.height)
        x0, x1, sx0, sx1 = _clip_span(ox, iw, self.width)
        if y1 <= y0 or x1 <= x0:
            return

        sa = src_a[sy0:sy1, sx0:sx1] * float(global_alpha)
        dst = self.pixels[y0:y1, x0:x1].astype(np.float32)
        da = dst[..., 3] / 255.0

        out_a = sa + da * (1.0 - sa)

        if src_rgb is None:
            s_rgb = np.zeros(sa.shape + (3,), dtype=np.float32)
        else:
            s_rgb = src_rgb[sy0:sy1, sx0:sx1]

        # Straight-alpha over; guard fully transparent results
        w_src = sa[..., None]
        w_dst = (da * (1.0 - sa))[..., None]
        safe_a = np.where(out_a > 0.0, out_a, 1.0)[..., None]
        out_rgb = (s_rgb * w_src + dst[..., :3] * w_dst) / safe_a

        region = self.pixels[y0:y1, x0:x1]
        region[..., :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
        region[..., 3] = np.clip(np.rint(out_a * 255.0), 0, 255).astype(np.uint8)

    def get_image_data(self, x: int, y: int, w: int, h: int) -> np.ndarray:
        """Copy out a (h, w, 4) rectangle; out-of-bounds pixels read transparent."""
        out = np.zeros((int(h), int(w), 4), dtype=np.uint8)
        y0, y1, sy0, sy1 = _clip_span(int(y), int(h), self.height)
        x0, x1, sx0, sx1 = _clip_span(int(x), int(w), self.width)
        if y1 > y0 and x1 > x0:
            out[sy0:sy1, sx0:sx1] = self.pixels[y0:y1, x0:x1]
        return out

    def put_image_data(self, data: np.ndarray, x: int, y: int) -> None:
        """Write a (h, w, 4) uint8 block at (x, y), replacing pixels (no blending).

        Raises
        ------
        ValueError
            If data is not (h, w, 4)
        """
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError(f"Expected (h, w, 4) RGBA data, got {data.shape}")
        h, w = data.shape[:2]
        y0, y1, sy0, sy1 = _clip_span(int(y), h, self.height)
        x0, x1, sx0, sx1 = _clip_span(int(x), w, self.width)
        if y1 > y0 and x1 > x0:
            self.pixels[y0:y1, x0:x1] = data[sy0:sy1, sx0:sx1]

    def save(self, path: Union[str, Path]) -> None:
        """Write the raster to disk (format from extension, PNG keeps alpha)."""
        fs.atomic_save_image(self.pixels, path)
        logger.debug(f"Saved {self!r} to {path}")
