"""LMS scores report -> OMR upload template converter."""

from .api import (
    ConversionResult,
    convert_lms_report,
    convert_uploads,
    read_upload,
)
from .builder import build_output
from .cleaning import parse_optional_number
from .exporter import serialize_and_download, serialize_output, write_scores_template
from .mapping import RECOGNIZED_HEADERS, HeaderLayout, RawRow
from .models import ConversionSummary, NormalizedStudentRecord, SheetData
from .normalize import normalize_scored, normalize_unscored
from .reader import parse_sheet
from .schema import OUTPUT_COLUMNS, OUTPUT_SCHEMA, OUTPUT_WIDTH, ZERO_DEFAULT_COLUMNS

__all__ = [
    "ConversionResult",
    "ConversionSummary",
    "HeaderLayout",
    "NormalizedStudentRecord",
    "OUTPUT_COLUMNS",
    "OUTPUT_SCHEMA",
    "OUTPUT_WIDTH",
    "RECOGNIZED_HEADERS",
    "RawRow",
    "SheetData",
    "ZERO_DEFAULT_COLUMNS",
    "build_output",
    "convert_lms_report",
    "convert_uploads",
    "normalize_scored",
    "normalize_unscored",
    "parse_optional_number",
    "parse_sheet",
    "read_upload",
    "serialize_and_download",
    "serialize_output",
    "write_scores_template",
]
