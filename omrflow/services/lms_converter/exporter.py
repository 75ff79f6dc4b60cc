"""Excel exporter for the OMR upload workbook."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, List, Sequence

from openpyxl import Workbook

from omrflow.core.errors import SerializationFailure
from omrflow_io import save_bytes_atomic, workbook_bytes

from .mapping import scores_template_headers
from .models import OutputRow
from .schema import OUTPUT_SCHEMA, OUTPUT_WIDTH, column_index_row

LOGGER = logging.getLogger(__name__)

DEFAULT_FILENAME = "OMR_Upload_Format.xlsx"
DEFAULT_SHEET_NAME = "OMR Upload"


def worksheet_rows(rows: Sequence[OutputRow]) -> Iterator[Sequence[Any]]:
    """Index marker row, template header row, then the data rows."""

    yield column_index_row()
    yield OUTPUT_SCHEMA
    for row in rows:
        if len(row) != OUTPUT_WIDTH:
            raise SerializationFailure(
                f"Output row has {len(row)} cells, the OMR template needs {OUTPUT_WIDTH}."
            )
        yield row


def serialize_output(rows: Sequence[OutputRow], *, sheet_name: str = DEFAULT_SHEET_NAME) -> bytes:
    """Serialize output rows into XLSX bytes."""

    try:
        return workbook_bytes(worksheet_rows(rows), sheet_name)
    except SerializationFailure:
        raise
    except Exception as exc:  # noqa: BLE001 - openpyxl raises assorted errors on bad cell values
        LOGGER.error("Workbook serialization failed: %s", exc)
        raise SerializationFailure(f"Could not create the OMR upload workbook: {exc}") from exc


def save_workbook(payload: bytes, output_dir: Path, *, filename: str = DEFAULT_FILENAME) -> Path:
    """Persist serialized workbook bytes under ``output_dir``."""

    target = output_dir / filename
    try:
        return save_bytes_atomic(payload, target)
    except OSError as exc:
        LOGGER.error("Could not write %s: %s", target, exc)
        raise SerializationFailure(f"Could not save {filename}: {exc}") from exc


def serialize_and_download(
    rows: Sequence[OutputRow],
    output_dir: Path,
    *,
    filename: str = DEFAULT_FILENAME,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path:
    """Serialize the rows and save them as the downloadable upload file."""

    payload = serialize_output(rows, sheet_name=sheet_name)
    path = save_workbook(payload, output_dir, filename=filename)
    LOGGER.info("OMR upload file saved: %s (%s student rows)", path, len(rows))
    return path


def write_scores_template(path: Path) -> Path:
    """Write an empty Scores Report carrying every recognized header."""

    wb = Workbook()
    ws = wb.active
    ws.title = "Scores Report"
    headers: List[str] = scores_template_headers()
    ws.append(headers)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    LOGGER.info("Scores Report template written: %s", path)
    return path
