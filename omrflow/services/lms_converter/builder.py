"""Projection of student records onto the OMR upload template."""

from __future__ import annotations

from itertools import chain
from typing import Iterable, List

from .models import NormalizedStudentRecord, OutputRow
from .schema import OUTPUT_COLUMNS, OUTPUT_WIDTH, ZERO_DEFAULT_COLUMNS


def build_row(record: NormalizedStudentRecord) -> OutputRow:
    """Lay one record out over the fixed template width."""

    row: OutputRow = [""] * OUTPUT_WIDTH
    for field, index in OUTPUT_COLUMNS.items():
        row[index] = getattr(record, field)
    for index in ZERO_DEFAULT_COLUMNS:
        if row[index] == "":
            row[index] = 0
    return row


def build_output(
    scored: Iterable[NormalizedStudentRecord],
    unscored: Iterable[NormalizedStudentRecord] = (),
) -> List[OutputRow]:
    """Build output rows: scored records first, then unscored, order kept, no sorting."""

    return [build_row(record) for record in chain(scored, unscored)]


__all__ = ["build_output", "build_row"]
