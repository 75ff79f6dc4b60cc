"""Spreadsheet output helpers."""

# Module responsibilities:
# - Build single-sheet XLSX workbooks in memory from plain row sequences.
# - Persist bytes atomically so readers never observe a half-written file.

from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Sequence

from openpyxl import Workbook

from .utils.log import get_logger

logger = get_logger("excel_writer")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def workbook_bytes(rows: Iterable[Sequence[Any]], sheet_title: str) -> bytes:
    """Serialize rows into an XLSX workbook with a single sheet.

    Args:
        rows: Row sequences written top to bottom starting at ``A1``.
        sheet_title: Title of the only worksheet.

    Returns:
        The workbook as bytes.
    """

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title
    count = 0
    for row in rows:
        ws.append(list(row))
        count += 1

    buffer = io.BytesIO()
    wb.save(buffer)
    payload = buffer.getvalue()
    logger.info("Workbook serialized", extra={"sheet": sheet_title, "rows": count, "bytes": len(payload)})
    return payload


def save_bytes_atomic(data: bytes, out_path: Path) -> Path:
    """Write ``data`` to ``out_path`` through a temporary sibling file.

    The temporary file is removed if anything fails, so ``out_path`` either
    holds the complete payload or is left untouched.
    """

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=out_path.parent, prefix=f".{out_path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_path, out_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info("File written", extra={"output": str(out_path), "bytes": len(data)})
    return out_path
