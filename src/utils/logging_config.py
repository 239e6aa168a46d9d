"""Unified logging configuration for applications embedding the heatmap engine.

Provides consistent logging across host apps, notebooks and tests:
    - Console and file handlers with size-based rotation
    - JSON output mode for ingestion (ELK, Vector, etc.)
    - Contextual fields (app, surface, session)
    - Warning capture (Python warnings → logging)

Public API:
    setup_logging(log_level="INFO", context={"app": "dashboard"})
    set_level("DEBUG")
    push_context(surface="overview")
    pop_context(keys=["surface"])

Format examples:
    Human: 2025-10-28T13:45:12.345Z | INFO     | app=dashboard | Message
    JSON: {"t":"2025-10-28T13:45:12.345+00:00","lvl":"INFO","app":"dashboard","msg":"..."}

Library modules only call logging.getLogger(__name__); handlers are installed
by the host application through setup_logging().
Context uses contextvars for thread isolation.
Idempotent: repeated setup_logging() calls don't duplicate handlers.
"""

import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('logging_context', default={})

_configured = False


class ContextFormatter(logging.Formatter):
    """Formatter that includes contextual fields.

    Supports:
        - Human-readable format with colors (optional)
        - JSON format for machine ingestion
        - Contextual fields from push_context()
    """

    def __init__(
        self,
        fmt_mode: str = "human",
        use_color: bool = True,
        tz: str = "UTC"
    ):
        super().__init__()
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.tz = tz

        self.colors = {
            'DEBUG': '\033[36m',
            'INFO': '\033[32m',
            'WARNING': '\033[33m',
            'ERROR': '\033[31m',
            'CRITICAL': '\033[35m',
            'RESET': '\033[0m'
        }

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})

        if self.tz == "UTC":
            ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        else:
            ts = datetime.fromtimestamp(record.created)

        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(
        self,
        record: logging.LogRecord,
        ts: datetime,
        context: dict
    ) -> str:
        log_dict = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'pid': os.getpid(),
            'msg': record.getMessage()
        }
        log_dict.update(context)

        if record.exc_info:
            log_dict['exc'] = self.formatException(record.exc_info)

        return json.dumps(log_dict)

    def _format_human(
        self,
        record: logging.LogRecord,
        ts: datetime,
        context: dict
    ) -> str:
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        level = record.levelname
        if self.use_color:
            level = f"{self.colors.get(level, '')}{level:8s}{self.colors['RESET']}"
        else:
            level = f"{level:8s}"

        context_str = ' '.join(f"{k}={v}" for k, v in context.items())

        parts = [ts_str, '|', level, '|']
        if context_str:
            parts.extend([context_str, '|'])
        parts.append(record.getMessage())

        line = ' '.join(parts)

        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)

        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Configure root logger (idempotent).

    Parameters
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
    log_file : str, optional
        Log file path; None for no file logging
    json : bool
        Use JSON format for the file handler, default False
    color : bool
        Use ANSI colors in console output, default True
    to_stderr : bool
        Log to stderr (console), default True
    rotate : dict, optional
        Rotation config:
        {"mode": "size", "max_bytes": 50_000_000, "backup_count": 5}
    tz : str
        Timezone for timestamps, "UTC" (default) or "local"
    capture_warnings : bool
        Capture Python warnings to logging, default True
    quiet_libs : list[str], optional
        Library names to set to WARNING level (e.g., ["PIL"])
    context : dict, optional
        Initial contextual fields (e.g., {"app": "dashboard"})

    Returns
    -------
    dict
        Configuration info: {"handlers": [...]}

    Examples
    --------
    >>> setup_logging(log_level="DEBUG", log_file="outputs/logs/heatmap.log",
    ...               rotate={"mode": "size", "max_bytes": 5_000_000, "backup_count": 3},
    ...               context={"app": "dashboard"})
    """
    global _configured

    root = logging.getLogger()

    if _configured:
        root.handlers.clear()

    root.setLevel(getattr(logging, log_level.upper()))

    handlers = []

    if to_stderr:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ContextFormatter("human", color, tz))
        root.addHandler(console_handler)
        handlers.append(console_handler)

    if log_file:
        file_handler = _create_file_handler(log_file, rotate, json, tz)
        root.addHandler(file_handler)
        handlers.append(file_handler)

    if context:
        push_context(**context)

    if quiet_libs:
        for lib in quiet_libs:
            logging.getLogger(lib).setLevel(logging.WARNING)

    if capture_warnings:
        route_warnings()

    _configured = True

    return {'handlers': handlers}


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
    tz: str
) -> logging.Handler:
    """Create file handler with optional rotation."""
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if rotate:
        mode = rotate.get('mode', 'size')
        if mode != 'size':
            raise ValueError(f"Unknown rotation mode: {mode}. Only 'size' is supported.")
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=rotate.get('max_bytes', 50_000_000),
            backupCount=rotate.get('backup_count', 5)
        )
    else:
        handler = logging.FileHandler(log_file)

    fmt_mode = "json" if json_format else "human"
    handler.setFormatter(ContextFormatter(fmt_mode, use_color=False, tz=tz))

    return handler


def set_level(level: str) -> None:
    """Update root logger level at runtime.

    Examples
    --------
    >>> set_level("DEBUG")  # see per-draw timings
    """
    logging.getLogger().setLevel(getattr(logging, level.upper()))


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(app="dashboard", surface="overview")
    >>> logger.info("Drawn")  # → "... | app=dashboard surface=overview | Drawn"
    """
    current = _context_var.get({})
    _context_var.set({**current, **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields.

    Parameters
    ----------
    keys : list[str], optional
        Keys to remove; if None, clears all context
    """
    if keys is None:
        _context_var.set({})
    else:
        current = dict(_context_var.get({}))
        for key in keys:
            current.pop(key, None)
        _context_var.set(current)


def route_warnings() -> None:
    """Route Python warnings to logging.warning()."""
    logging.captureWarnings(True)
    logging.getLogger('py.warnings').setLevel(logging.WARNING)
