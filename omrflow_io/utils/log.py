"""Logging helpers for the omrflow_io package."""

# Module responsibilities:
# - Centralize logging configuration with an optional rotating file handler + stream handler.
# - Provide get_logger() that ensures configuration occurs once.

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

LOG_DIR_ENV = "OMRFLOW_IO_LOG_DIR"
_LOG_CONFIGURED = False


def _resolve_log_dir(log_dir: Optional[Path] = None) -> Optional[Path]:
    """Resolve the log directory, ensuring existence. ``None`` means console only."""
    target = log_dir
    if target is None and os.getenv(LOG_DIR_ENV):
        target = Path(os.environ[LOG_DIR_ENV])
    if target is None:
        return None
    target.mkdir(parents=True, exist_ok=True)
    return target


def _configure_logging(log_dir: Optional[Path] = None) -> None:
    """Configure the package logger once with rotating file + console handlers."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger("omrflow_io")
    root_logger.setLevel(logging.INFO)

    directory = _resolve_log_dir(log_dir)
    if directory is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            directory / "omrflow_io.log", maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING)
    root_logger.addHandler(console_handler)

    _LOG_CONFIGURED = True


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Return a package-scoped logger.

    Args:
        name: Logger name suffix appended to the package root logger namespace.
        log_dir: Optional override for the logging directory.

    Returns:
        Configured logger scoped under ``omrflow_io``.
    """

    _configure_logging(log_dir)
    return logging.getLogger(f"omrflow_io.{name}")
