"""Data models used by the LMS -> OMR converter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .mapping import HeaderLayout, RawRow

OutputRow = List[Any]


@dataclass(frozen=True, slots=True)
class NormalizedStudentRecord:
    """Canonical student-score record extracted from one sheet row."""

    student_id: str
    student_name: str = "Unknown"
    physics: float = 0.0
    chemistry: float = 0.0
    maths: float = 0.0
    biology: float = 0.0
    correct: float = 0.0
    wrong: float = 0.0
    unattempted: float = 0.0

    def __post_init__(self) -> None:
        if not self.student_id:
            raise ValueError("student_id must be non-empty")


@dataclass(slots=True)
class SheetData:
    """First sheet of an uploaded workbook split into header layout and rows."""

    label: str
    layout: HeaderLayout
    rows: List[RawRow]

    @property
    def headers(self) -> Tuple[str, ...]:
        return self.layout.headers


@dataclass(slots=True)
class SheetDiagnostics:
    """What happened to one input sheet during normalization."""

    label: str
    data_rows: int = 0
    kept_rows: int = 0
    dropped_rows: List[int] = field(default_factory=list)
    missing_fields: List[str] = field(default_factory=list)
    unrecognized_headers: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ConversionSummary:
    """Per-run diagnostics for logging and the Markdown report."""

    scored: Optional[SheetDiagnostics] = None
    unscored: Optional[SheetDiagnostics] = None
    output_rows: int = 0

    @property
    def dropped_rows(self) -> int:
        return sum(len(d.dropped_rows) for d in (self.scored, self.unscored) if d is not None)


__all__ = [
    "ConversionSummary",
    "NormalizedStudentRecord",
    "OutputRow",
    "SheetData",
    "SheetDiagnostics",
]
