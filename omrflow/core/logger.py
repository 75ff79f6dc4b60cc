"""Application logging for omrflow.

The ``omrflow`` logger is the parent of every module logger in the package
(``omrflow.services.lms_converter.api`` and friends), so one call to
:func:`get_logger` routes conversion records to both the rotating
``work/logs/conversions.log`` file and stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .workspace import work_dir

LOGGER_NAME = "omrflow"
LOG_FILENAME = "conversions.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (pid %(process)d): %(message)s"

_LOGGER: logging.Logger | None = None


def _initial_level() -> int:
    level = getattr(logging, os.getenv("OMRFLOW_LOG_LEVEL", "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the configured ``omrflow`` logger, creating its handlers once.

    The initial level comes from ``OMRFLOW_LOG_LEVEL``; the CLI's
    ``--log-level`` option overrides it. The process id is part of every
    record because separate conversions may run side by side.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    base = work_dir() / "logs" if log_dir is None else Path(log_dir)
    base.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_initial_level())
    logger.propagate = False

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(
        base / LOG_FILENAME, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _LOGGER = logger
    return logger


def reset_logger() -> None:
    """Detach handlers and forget the cached logger (used by tests)."""
    global _LOGGER
    if _LOGGER is not None:
        for handler in list(_LOGGER.handlers):
            _LOGGER.removeHandler(handler)
            handler.close()
        _LOGGER.propagate = True
    _LOGGER = None
