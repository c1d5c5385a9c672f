"""Centralized logging configuration for the ``days`` package.

This module provides two public helpers:

- ``configure_logging(...)``: attach a single ``StreamHandler`` to the package
  root logger (``"days"``). Called once by the CLI at process startup.
- ``get_logger(name)``: acquire a logger by name, ensuring that the package
  root logger has at least a ``NullHandler`` attached when not configured.

Library modules never attach their own handlers. They call
``get_logger("days.<module>")`` and rely on the configuration performed by the
CLI or host application.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "days"
_CONFIGURED = False


def level_from_name(name: str) -> int | None:
    """Return the numeric level for ``name`` (``"debug"``, ``"20"``, ...) or ``None``."""

    s = name.strip().upper()
    if s.isdigit():
        return int(s)
    return logging.getLevelNamesMapping().get(s)


def _parse_level(level: int | str | None) -> int:
    # Explicit argument, then DAYS_LOG_LEVEL, then WARNING. Each source is read
    # once; an unrecognized name falls through to the next one.
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        numeric = level_from_name(level)
        if numeric is not None:
            return numeric
    env_val = os.getenv("DAYS_LOG_LEVEL")
    if env_val:
        numeric = level_from_name(env_val)
        if numeric is not None:
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
        Logging level as ``int`` or level-name string. If ``None``, defaults to
        the ``DAYS_LOG_LEVEL`` environment variable when set, otherwise
        ``logging.WARNING`` so that only skipped-line warnings reach stderr.
    fmt:
        Optional logging format string. Defaults to
        ``"%(levelname)s %(message)s"``.
    stream:
        Output stream for the handler. Resolved at call time (defaults to the
        current ``sys.stderr``) so test runners that swap stderr capture it.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(_parse_level(level))
    handler.setFormatter(logging.Formatter(fmt or "%(levelname)s %(message)s"))

    logger.setLevel(_parse_level(level))
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Drop handlers installed by :func:`configure_logging` (used by tests)."""

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, ensuring safe defaults for library use.

    When the central configuration hasn't run yet, attach a ``NullHandler`` to
    the package root logger so library use stays silent until an application
    configures handlers explicitly.
    """

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
