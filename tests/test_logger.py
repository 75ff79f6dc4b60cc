from __future__ import annotations

import logging
from pathlib import Path

import pytest

from omrflow.core.logger import LOG_FILENAME, get_logger
from omrflow.core.workspace import ensure_work_dirs


def test_module_loggers_reach_conversion_log(_isolated_workspace: Path) -> None:
    logger = get_logger()
    logging.getLogger("omrflow.services.lms_converter.api").warning("converted S1")
    for handler in logger.handlers:
        handler.flush()

    log_file = _isolated_workspace / "omrflow" / "work" / "logs" / LOG_FILENAME
    text = log_file.read_text(encoding="utf-8")
    assert "converted S1" in text
    assert "omrflow.services.lms_converter.api (pid " in text


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OMRFLOW_LOG_LEVEL", "warning")

    assert get_logger(tmp_path).level == logging.WARNING


def test_unknown_environment_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OMRFLOW_LOG_LEVEL", "chatty")

    assert get_logger(tmp_path).level == logging.INFO


def test_ensure_work_dirs_creates_output_and_logs(_isolated_workspace: Path) -> None:
    dirs = ensure_work_dirs()

    assert set(dirs) == {"out", "logs"}
    assert dirs["out"] == _isolated_workspace / "omrflow" / "work" / "out"
    assert all(path.is_dir() for path in dirs.values())
