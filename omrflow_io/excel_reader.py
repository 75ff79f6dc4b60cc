"""Spreadsheet input helpers."""

# Module responsibilities:
# - Sniff the real format of uploaded bytes (XLSX, XLS or delimited text) regardless of file name.
# - Return the first sheet as a plain grid of Python values with empty cells as "".

from __future__ import annotations

import csv
import io
from typing import Any, List, Literal

import pandas as pd

from .utils.log import get_logger

logger = get_logger("excel_reader")

SpreadsheetFormat = Literal["xlsx", "xls", "csv"]
Grid = List[List[Any]]

XLSX_SIGNATURE = b"PK\x03\x04"
XLS_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

_EXCEL_ENGINES = {"xlsx": "openpyxl", "xls": "xlrd"}
_TEXT_ENCODINGS = ("utf-8-sig", "cp1252")


class SpreadsheetReadError(ValueError):
    """Raised when bytes cannot be parsed as a spreadsheet."""


def detect_format(data: bytes) -> SpreadsheetFormat:
    """Identify the spreadsheet format from the leading bytes."""

    if data.startswith(XLSX_SIGNATURE):
        return "xlsx"
    if data.startswith(XLS_SIGNATURE):
        return "xls"
    return "csv"


def _clean_cell(value: Any) -> Any:
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        return value
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        # numpy scalars -> builtin int/float/bool
        return value.item()
    return value


def _decode_text(data: bytes) -> str:
    for encoding in _TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise SpreadsheetReadError("delimited text is not valid UTF-8 or cp1252")


def _read_delimited(data: bytes) -> Grid:
    text = _decode_text(data)
    try:
        return [list(row) for row in csv.reader(io.StringIO(text, newline=""))]
    except csv.Error as exc:
        raise SpreadsheetReadError(f"malformed delimited text: {exc}") from exc


def _read_workbook(data: bytes, fmt: SpreadsheetFormat) -> Grid:
    try:
        df = pd.read_excel(
            io.BytesIO(data),
            sheet_name=0,
            header=None,
            dtype=object,
            engine=_EXCEL_ENGINES[fmt],
        )
    except Exception as exc:  # noqa: BLE001 - zip/OLE/engine errors vary by backend
        raise SpreadsheetReadError(f"unreadable {fmt} workbook: {exc}") from exc
    grid = [[_clean_cell(v) for v in row] for row in df.itertuples(index=False, name=None)]
    return _trim_leading_blanks(grid)


def _trim_leading_blanks(grid: Grid) -> Grid:
    """Start the grid at the sheet's used range (first non-empty row and column)."""

    def blank(value: Any) -> bool:
        return value == "" or value is None

    while grid and all(blank(v) for v in grid[0]):
        grid = grid[1:]
    if not grid:
        return grid
    offset = min(
        (next(i for i, v in enumerate(row) if not blank(v)) for row in grid if any(not blank(v) for v in row)),
        default=0,
    )
    if offset:
        grid = [row[offset:] for row in grid]
    return grid


def read_grid(data: bytes, *, source: str = "<upload>") -> Grid:
    """Load the first sheet of a spreadsheet as a list of rows.

    Args:
        data: Raw file bytes; the format is sniffed from content.
        source: Label used in log records (usually the original file name).

    Returns:
        Rows of cell values. Empty cells are ``""``; rows keep their
        natural length so ragged CSV lines are preserved. Workbook grids
        start at the first non-empty row and column.

    Raises:
        SpreadsheetReadError: When the content cannot be parsed.
    """

    fmt = detect_format(data)
    logger.info("Reading spreadsheet", extra={"source": source, "format": fmt, "bytes": len(data)})

    if fmt == "csv":
        grid = _read_delimited(data)
    else:
        grid = _read_workbook(data, fmt)

    logger.info("Spreadsheet loaded", extra={"source": source, "rows": len(grid)})
    return grid
