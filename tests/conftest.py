from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from omrflow.core import logger as core_logger


@pytest.fixture(autouse=True)
def _isolated_workspace(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """Keep logs and default outputs out of the project tree."""

    root = tmp_path_factory.mktemp("omrflow_root")
    monkeypatch.setenv("OMRFLOW_ROOT", str(root))
    monkeypatch.delenv("OMRFLOW_CONFIG", raising=False)
    monkeypatch.delenv("OMRFLOW_LOG_LEVEL", raising=False)
    core_logger.reset_logger()
    yield root
    core_logger.reset_logger()


def xlsx_bytes(rows: Sequence[Sequence[Any]], title: str = "Sheet1") -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(list(row))
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def csv_bytes(lines: Sequence[str]) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture()
def make_xlsx() -> Callable[..., bytes]:
    return xlsx_bytes


@pytest.fixture()
def make_csv() -> Callable[[Sequence[str]], bytes]:
    return csv_bytes


SCORES_HEADERS = [
    "Username",
    "First Name",
    "Last Name",
    "PHYSICS Score",
    "CHEMISTRY Score",
    "MATHS Score",
    "No. Of Correct Answers",
]


@pytest.fixture()
def scores_csv() -> bytes:
    """Scores Report with one student and no BIOLOGY/wrong/unattempted columns."""

    return csv_bytes([",".join(SCORES_HEADERS), "S100,John,Doe,80,70,,18"])


@pytest.fixture()
def data_dir() -> Path:
    return Path(__file__).resolve().parent / "data"
