"""Centralized logging configuration for the ``nabreport`` package.

- ``configure_logging(...)`` attaches a single ``StreamHandler`` to the
  package root logger. The CLI calls it once at startup.
- ``get_logger(name)`` returns a logger and makes sure the package root has
  at least a ``NullHandler`` when nothing has been configured.

Library modules never attach their own handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "nabreport"
_CONFIGURED = False
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _parse_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv("NABREPORT_LOG_LEVEL")
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package root logger exactly once.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level name. ``None`` falls back to the
        ``NABREPORT_LOG_LEVEL`` environment variable, then ``WARNING``.
    fmt:
        Optional format string.
    stream:
        Output stream for the handler, ``sys.stderr`` when omitted.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    numeric_level = _parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a package logger.

    ``name`` is usually ``__name__`` of the calling module.
    """
    root = logging.getLogger(_PKG_LOGGER_NAME)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name or _PKG_LOGGER_NAME)
