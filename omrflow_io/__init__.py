"""`omrflow_io` top-level package exports the spreadsheet IO helpers."""

# Module responsibilities:
# - Re-export high-level interfaces for spreadsheet reading/writing so consumers have a stable API surface.

from __future__ import annotations

from .excel_reader import SpreadsheetReadError, detect_format, read_grid
from .excel_writer import XLSX_MEDIA_TYPE, save_bytes_atomic, workbook_bytes

__all__ = [
    "SpreadsheetReadError",
    "detect_format",
    "read_grid",
    "XLSX_MEDIA_TYPE",
    "save_bytes_atomic",
    "workbook_bytes",
]

__version__ = "0.1.0"
