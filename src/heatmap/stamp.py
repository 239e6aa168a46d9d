"""Blurred circular influence stamp.

One stamp is built per (radius, blur) pair and shared read-only by every
point of a draw pass. The footprint is a solid anti-aliased disk of `radius`
softened by a Gaussian blur of sigma = blur / 2 (the canvas shadowBlur
convention), centered in a square of side 2 * (radius + blur).
"""

import logging
from dataclasses import dataclass

import cv2
import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 25
DEFAULT_BLUR = 15


@dataclass(frozen=True, eq=False)
class Stamp:
    """Immutable alpha footprint for one point.

    Attributes
    ----------
    alpha : np.ndarray
        (side, side) float32 in [0, 1], read-only
    radius : int
        Solid disk radius in pixels
    blur : int
        Blur falloff width in pixels
    """

    alpha: np.ndarray
    radius: int
    blur: int

    @property
    def offset(self) -> int:
        """Half-size of the stamp; points are drawn at (x - offset, y - offset)."""
        return self.radius + self.blur

    @property
    def side(self) -> int:
        return 2 * self.offset


def build_stamp(radius: int = DEFAULT_RADIUS, blur: int = DEFAULT_BLUR) -> Stamp:
    """Build a blurred circular alpha stamp.

    Parameters
    ----------
    radius : int
        Disk radius in pixels, default 25; fractional values round to the
        nearest pixel
    blur : int
        Blur width in pixels, default 15; 0 gives a hard-edged disk

    Returns
    -------
    Stamp
        Radially symmetric footprint, peak ≈ 1 at the center, ≈ 0 at the
        stamp border
    """
    radius = int(round(radius))
    blur = int(round(blur))
    offset = radius + blur
    side = 2 * offset

    # Pixel centers sit at i + 0.5, the disk center at the square's midpoint
    coords = np.arange(side, dtype=np.float32) + 0.5 - offset
    dist = np.hypot(coords[None, :], coords[:, None])
    disk = np.clip(radius - dist + 0.5, 0.0, 1.0).astype(np.float32)

    if blur > 0:
        alpha = cv2.GaussianBlur(
            disk, (0, 0),
            sigmaX=blur / 2.0, sigmaY=blur / 2.0,
            borderType=cv2.BORDER_CONSTANT
        )
        alpha = np.clip(alpha, 0.0, 1.0)
    else:
        alpha = disk

    alpha.setflags(write=False)

    logger.debug(
        f"Built stamp: radius={radius} blur={blur} side={side} "
        f"peak={float(alpha.max()):.3f}"
    )
    return Stamp(alpha=alpha, radius=radius, blur=blur)
