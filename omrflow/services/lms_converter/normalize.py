"""Row normalization into canonical student records."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .cleaning import cell_text, parse_optional_number
from .mapping import SCORE_FIELDS, RawRow
from .models import NormalizedStudentRecord, SheetData, SheetDiagnostics

LOGGER = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"

Normalizer = Callable[[RawRow], Optional[NormalizedStudentRecord]]


def _student_id(row: RawRow) -> str:
    return cell_text(row.value("student_id"))


def _student_name(row: RawRow) -> str:
    full = f"{cell_text(row.value('first_name'))} {cell_text(row.value('last_name'))}".strip()
    if full:
        return full
    for field in ("name", "full_name"):
        single = cell_text(row.value(field))
        if single:
            return single
    return UNKNOWN_NAME


def normalize_scored(row: RawRow) -> Optional[NormalizedStudentRecord]:
    """Extract a scored record, or ``None`` when the row has no Username."""

    student_id = _student_id(row)
    if not student_id:
        return None
    scores = {field: parse_optional_number(row.value(field)) for field in SCORE_FIELDS}
    return NormalizedStudentRecord(student_id=student_id, student_name=_student_name(row), **scores)


def normalize_unscored(row: RawRow) -> Optional[NormalizedStudentRecord]:
    """Extract a roster record with every score forced to zero."""

    student_id = _student_id(row)
    if not student_id:
        return None
    return NormalizedStudentRecord(student_id=student_id, student_name=_student_name(row))


def normalize_sheet(
    sheet: SheetData,
    normalizer: Normalizer,
    expected_fields: Sequence[str] = ("student_id",),
) -> Tuple[List[NormalizedStudentRecord], SheetDiagnostics]:
    """Apply ``normalizer`` to every row, collecting drop diagnostics.

    Dropped rows are reported with their 1-based spreadsheet row number
    (the header is row 1).
    """

    diagnostics = SheetDiagnostics(
        label=sheet.label,
        data_rows=len(sheet.rows),
        missing_fields=sheet.layout.missing_fields(expected_fields),
        unrecognized_headers=sheet.layout.unrecognized,
    )
    if diagnostics.missing_fields:
        LOGGER.warning("%s lacks recognized columns for: %s", sheet.label, diagnostics.missing_fields)

    records: List[NormalizedStudentRecord] = []
    for offset, row in enumerate(sheet.rows, start=2):
        record = normalizer(row)
        if record is None:
            diagnostics.dropped_rows.append(offset)
            continue
        records.append(record)
    diagnostics.kept_rows = len(records)

    if diagnostics.dropped_rows:
        LOGGER.warning(
            "%s: skipped %s row(s) without a Username: %s",
            sheet.label,
            len(diagnostics.dropped_rows),
            diagnostics.dropped_rows,
        )
    return records, diagnostics
