"""Lightweight wall-clock profiling.

Provides:
    - timer(): Context manager for wall-clock timing with optional sink
    - TimerAccumulator: running mean over repeated measurements

Used to measure heatmap draw passes (render, accumulate, colorize).
The engine passes a logger sink so timings land in DEBUG logs.
"""

import time
from contextlib import contextmanager
from typing import Callable, Optional


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Context manager for wall-clock timing.

    Parameters
    ----------
    name : str
        Timer name (for logging/display)
    sink : Optional[Callable[[str, float], None]]
        Optional callback(name, elapsed_seconds)
        If None, prints to stdout

    Examples
    --------
    >>> with timer("draw"):
    ...     engine.draw()
    draw: 0.012 s

    >>> with timer("draw", sink=lambda n, s: logger.debug("%s took %.4f s", n, s)):
    ...     engine.draw()
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is not None:
            sink(name, elapsed)
        else:
            print(f"{name}: {elapsed:.3f} s")


class TimerAccumulator:
    """Accumulate multiple timing measurements for averaging.

    Examples
    --------
    >>> draw_timer = TimerAccumulator("draw")
    >>> for _ in range(100):
    ...     with draw_timer.measure():
    ...         engine.draw()
    >>> print(f"Mean: {draw_timer.mean():.4f} s")
    """

    def __init__(self, name: str):
        self.name = name
        self.total_time = 0.0
        self.count = 0

    @contextmanager
    def measure(self):
        """Context manager to measure and accumulate time."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.total_time += time.perf_counter() - start
            self.count += 1

    def mean(self) -> float:
        """Mean time per measurement in seconds, 0.0 if none recorded."""
        return self.total_time / self.count if self.count > 0 else 0.0

    def reset(self) -> None:
        self.total_time = 0.0
        self.count = 0

    def __repr__(self) -> str:
        return f"TimerAccumulator({self.name}, mean={self.mean():.4f}s, count={self.count})"
