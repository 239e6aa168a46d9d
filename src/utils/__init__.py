"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Config validation (validators)
    - Color resolution (color)
    - Atomic I/O and YAML (fs)
    - Profiling (profiler)
    - Unified logging (logging_config)

No module in utils/ may import from src.heatmap.

Convenience imports:
    from src.utils import fs, color, validators
    from src.utils.logging_config import setup_logging, push_context
"""

from . import color
from . import fs
from . import logging_config
from . import profiler
from . import validators

from .logging_config import push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'push_context',
]
