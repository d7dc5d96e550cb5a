"""Logging utilities for the picross solver."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
ROOT_LOGGER_NAME = "picross"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Install a single stream handler on the root logger.

    Solver output (JSON payloads, rendered grids) goes to stdout, so log
    records default to stderr to keep the two apart.
    """

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Map ``"debug"``/``"INFO"``/... to a logging level, falling back to ``default``."""

    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
