"""Public API for the LMS -> OMR converter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from omrflow.config import ConverterSettings
from omrflow.core.errors import EmptyOrMalformedInput, MissingRequiredFile, UnsupportedFileType
from omrflow_io import XLSX_MEDIA_TYPE

from .builder import build_output
from .exporter import save_workbook, serialize_output
from .mapping import SCORE_FIELDS
from .models import ConversionSummary, NormalizedStudentRecord, SheetDiagnostics
from .normalize import normalize_scored, normalize_sheet, normalize_unscored
from .reader import parse_sheet
from .report import generate_report

LOGGER = logging.getLogger(__name__)

SCORES_LABEL = "Scores Report"
ROSTER_LABEL = "Not Attempted Students"

SUCCESS_MESSAGE = "OMR-compatible Excel file downloaded successfully!"


class ConversionResult(BaseModel):
    """Aggregated outcome returned to callers."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    output_path: str
    media_type: str = XLSX_MEDIA_TYPE
    scored_rows: int
    unscored_rows: int
    dropped_rows: int
    report_path: str | None = None
    message: str = SUCCESS_MESSAGE
    summary: ConversionSummary


def read_upload(path: str | Path | None, settings: ConverterSettings, *, label: str) -> bytes:
    """Return the bytes of an uploaded file after the presence and extension checks."""

    if path is None or str(path).strip() == "":
        raise MissingRequiredFile(f"Please upload the {label} file.")
    source = Path(path)
    if source.suffix.lower() not in settings.allowed_extensions:
        raise UnsupportedFileType(
            f"{source.name}: only {', '.join(settings.allowed_extensions)} files are allowed."
        )
    if not source.is_file():
        raise MissingRequiredFile(f"{label} file not found: {source}")
    try:
        return source.read_bytes()
    except OSError as exc:
        raise EmptyOrMalformedInput(f"{label} could not be read: {exc}") from exc


def _roster_records(data: bytes) -> Tuple[List[NormalizedStudentRecord], Optional[SheetDiagnostics]]:
    sheet = parse_sheet(data, label=ROSTER_LABEL, required=False)
    if not sheet.rows:
        # An empty roster means every student attempted the exam.
        LOGGER.warning("%s has no data rows; continuing without it", ROSTER_LABEL)
        return [], None
    return normalize_sheet(sheet, normalize_unscored)


def convert_uploads(
    scores_data: bytes | None,
    not_attempted_data: bytes | None = None,
    *,
    settings: ConverterSettings | None = None,
) -> Tuple[bytes, ConversionSummary]:
    """Convert uploaded sheets into OMR upload workbook bytes.

    Args:
        scores_data: Bytes of the LMS Scores Report (required).
        not_attempted_data: Bytes of the optional roster of absent students.
        settings: Converter settings; defaults apply when omitted.

    Returns:
        The serialized workbook and per-sheet diagnostics.
    """

    settings = settings or ConverterSettings()
    if scores_data is None:
        raise MissingRequiredFile()

    scores_sheet = parse_sheet(scores_data, label=SCORES_LABEL)
    scored, scored_diag = normalize_sheet(
        scores_sheet, normalize_scored, expected_fields=("student_id",) + SCORE_FIELDS
    )

    unscored: List[NormalizedStudentRecord] = []
    unscored_diag: Optional[SheetDiagnostics] = None
    if not_attempted_data is not None:
        unscored, unscored_diag = _roster_records(not_attempted_data)

    rows = build_output(scored, unscored)
    payload = serialize_output(rows, sheet_name=settings.sheet_name)
    summary = ConversionSummary(scored=scored_diag, unscored=unscored_diag, output_rows=len(rows))
    return payload, summary


def convert_lms_report(
    scores_report: str | Path | None,
    output_dir: str | Path,
    not_attempted: str | Path | None = None,
    settings: ConverterSettings | None = None,
) -> ConversionResult:
    """Convert an LMS Scores Report (plus optional roster) into the OMR upload file.

    Nothing is written unless every step succeeds; errors surface as
    :class:`omrflow.core.errors.ConversionError` subclasses.
    """

    settings = settings or ConverterSettings()
    out_dir = Path(output_dir)

    scores_data = read_upload(scores_report, settings, label=SCORES_LABEL)
    roster_data = None
    if not_attempted is not None:
        roster_data = read_upload(not_attempted, settings, label=ROSTER_LABEL)

    LOGGER.info("Converting %s (roster: %s)", scores_report, not_attempted or "none")
    payload, summary = convert_uploads(scores_data, roster_data, settings=settings)
    output_path = save_workbook(payload, out_dir, filename=settings.output_filename)

    report_path: Path | None = None
    if settings.write_report:
        try:
            report_path = generate_report(out_dir, summary, output_path, settings.report_filename)
        except OSError as exc:
            LOGGER.warning("Conversion report not written: %s", exc)

    scored_rows = summary.scored.kept_rows if summary.scored else 0
    unscored_rows = summary.unscored.kept_rows if summary.unscored else 0
    LOGGER.info(
        "Converted %s rows (%s scored / %s not attempted / %s skipped)",
        summary.output_rows,
        scored_rows,
        unscored_rows,
        summary.dropped_rows,
    )

    return ConversionResult(
        output_path=str(output_path),
        scored_rows=scored_rows,
        unscored_rows=unscored_rows,
        dropped_rows=summary.dropped_rows,
        report_path=str(report_path) if report_path else None,
        summary=summary,
    )
