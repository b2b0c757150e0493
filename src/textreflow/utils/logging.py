"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide a helper to obtain package loggers.
    - Allow a verbose/debug mode through ``TEXTREFLOW_LOG_LEVEL``.

Notes/Edge cases:
    - Configuration is idempotent; only the ``textreflow`` logger receives a
      handler so applications embedding the library keep control of the root
      logger.
"""

from __future__ import annotations

import logging
import os

_ROOT_NAME = "textreflow"
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_configured = False


def _configure() -> None:
    global _configured
    if _configured:
        return
    level_name = os.getenv("TEXTREFLOW_LOG_LEVEL", "WARNING").upper()
    root = logging.getLogger(_ROOT_NAME)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.WARNING))
    root.propagate = False
    _configured = True


def set_level(level: int | str) -> None:
    """Set the level of the package logger, configuring it first if needed."""

    _configure()
    logging.getLogger(_ROOT_NAME).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package logger for module ``name``."""

    _configure()
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)


__all__ = ["get_logger", "set_level"]
