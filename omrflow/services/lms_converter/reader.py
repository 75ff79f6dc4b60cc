"""Parse uploaded LMS sheets into header layout + raw rows."""

from __future__ import annotations

import logging
from typing import List

from omrflow.core.errors import EmptyOrMalformedInput
from omrflow_io import SpreadsheetReadError, read_grid

from .cleaning import cell_text
from .mapping import HeaderLayout, RawRow
from .models import SheetData

LOGGER = logging.getLogger(__name__)


def parse_sheet(data: bytes, *, label: str = "Scores Report", required: bool = True) -> SheetData:
    """Read the first sheet of ``data`` (CSV, XLS or XLSX, sniffed from content).

    Row 0 is the header row; every later row is zipped positionally against
    it, missing trailing cells become ``""`` and surplus cells are dropped.

    Raises:
        EmptyOrMalformedInput: content is unreadable, or has no data row
            while ``required`` is true. With ``required=False`` a sheet
            without data rows comes back with an empty ``rows`` list.
    """

    try:
        grid = read_grid(data, source=label)
    except SpreadsheetReadError as exc:
        LOGGER.error("Could not read %s: %s", label, exc)
        raise EmptyOrMalformedInput(f"{label} could not be read: {exc}") from exc

    if len(grid) < 2 and required:
        raise EmptyOrMalformedInput(f"{label} is empty or missing data.")

    headers = [cell_text(h) for h in grid[0]] if grid else []
    layout = HeaderLayout.from_headers(headers)
    width = len(headers)

    rows: List[RawRow] = []
    for raw in grid[1:]:
        cells = list(raw[:width])
        if len(cells) < width:
            cells.extend([""] * (width - len(cells)))
        rows.append(RawRow(cells=tuple(cells), layout=layout))

    LOGGER.info(
        "Parsed %s: %s data rows, recognized headers=%s",
        label,
        len(rows),
        layout.recognized,
    )
    return SheetData(label=label, layout=layout, rows=rows)
