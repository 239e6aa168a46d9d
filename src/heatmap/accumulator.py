"""Persistent per-pixel intensity sum and overlap count.

Each draw pass adds the scratch surface's alpha (as [0, 1]) into the
intensity buffer and increments the count buffer for every pixel, covered or
not. The colorizer divides one by the other, which turns repeated passes
into a running average instead of an overwrite.

Invariants:
    - count == passes for every pixel between resets
    - intensity and count are always zeroed together
    - count is uint16; past 65535 passes it wraps
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class IntensityAccumulator:
    """Dual sum/count buffers for one raster size.

    Attributes
    ----------
    width, height : int
        Buffer size in pixels
    passes : int
        accumulate() calls since the last reset
    """

    def __init__(self, width: int, height: int):
        self.width = 0
        self.height = 0
        self.passes = 0
        self._intensity = np.zeros((0, 0), dtype=np.float32)
        self._count = np.zeros((0, 0), dtype=np.uint16)
        self.resize(width, height)

    def __repr__(self) -> str:
        return f"IntensityAccumulator({self.width}x{self.height}, passes={self.passes})"

    @property
    def intensity(self) -> np.ndarray:
        """Read-only view of the (H, W) float32 intensity sums."""
        view = self._intensity.view()
        view.setflags(write=False)
        return view

    @property
    def count(self) -> np.ndarray:
        """Read-only view of the (H, W) uint16 overlap counts."""
        view = self._count.view()
        view.setflags(write=False)
        return view

    def resize(self, width: int, height: int) -> None:
        """Reallocate both buffers, zeroed, for a new raster size."""
        self.width = int(width)
        self.height = int(height)
        self._intensity = np.zeros((self.height, self.width), dtype=np.float32)
        self._count = np.zeros((self.height, self.width), dtype=np.uint16)
        self.passes = 0
        logger.debug(f"Accumulator buffers allocated: {self.width}x{self.height}")

    def accumulate(self, alpha: np.ndarray) -> None:
        """Merge one pass of scratch alpha into the buffers.

        Parameters
        ----------
        alpha : np.ndarray
            (H, W) uint8 alpha channel of the scratch surface

        Raises
        ------
        ValueError
            If alpha does not match the buffer size
        """
        if alpha.shape != self._intensity.shape:
            raise ValueError(
                f"Alpha shape {alpha.shape} != accumulator shape "
                f"({self.height}, {self.width})"
            )
        self._intensity += alpha.astype(np.float32) / 255.0
        # In-place add keeps uint16 and wraps on overflow
        self._count += np.uint16(1)
        self.passes += 1

    def reset(self) -> None:
        """Zero both buffers in full."""
        self._intensity.fill(0.0)
        self._count.fill(0)
        self.passes = 0

    def average(self) -> np.ndarray:
        """Per-pixel intensity / count, 0 where nothing has been accumulated.

        Returns
        -------
        np.ndarray
            (H, W) float32, a fresh array
        """
        avg = np.zeros_like(self._intensity)
        np.divide(self._intensity, self._count, out=avg, where=self._count > 0)
        return avg
