"""Centralised logging helpers.

``configure_logging`` installs a single stderr handler on the root logger.
The remaining helpers support structured DEBUG traces: modules guard them with
``is_debug_enabled(logger)`` and attach ``extra_context(...)`` fields.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_NAME = "goenv-stderr"


def _level_from_env() -> int:
    """Pick the log level from GOENV_DEBUG / GOENV_LOG_LEVEL."""
    if os.environ.get(Constants.ENV_DEBUG):
        return logging.DEBUG
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "WARNING").upper()
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger once; later calls only adjust the level.

    Args:
        level: Explicit level; defaults to the environment-derived level.
        log_file: Optional path for an additional file handler.
    """
    root = logging.getLogger()
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level if level is not None else _level_from_env())

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        root.addHandler(file_handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping, dropping fields whose value is None."""
    return {k: v for k, v in fields.items() if v is not None}


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.monotonic()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.monotonic()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.monotonic()
        return int((end - self._start) * 1000)
