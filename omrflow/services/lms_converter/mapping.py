"""Recognized LMS headers and the per-sheet header layout."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple

# Canonical field -> exact header strings accepted for it. Matching is
# case-sensitive; headers not listed here are ignored.
RECOGNIZED_HEADERS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "student_id": ("Username",),
        "first_name": ("First Name",),
        "last_name": ("Last Name",),
        "name": ("Name",),
        "full_name": ("Full Name",),
        "physics": ("PHYSICS Score",),
        "chemistry": ("CHEMISTRY Score",),
        "maths": ("MATHS Score",),
        "biology": ("BIOLOGY Score",),
        "correct": ("No. Of Correct Answers",),
        "wrong": ("No. Of incorrect Answers",),
        "unattempted": ("No. Of unanswered Questions",),
    }
)

SCORE_FIELDS: Tuple[str, ...] = (
    "physics",
    "chemistry",
    "maths",
    "biology",
    "correct",
    "wrong",
    "unattempted",
)

_ALIAS_TO_FIELD: Mapping[str, str] = MappingProxyType(
    {alias: field for field, aliases in RECOGNIZED_HEADERS.items() for alias in aliases}
)


def scores_template_headers() -> List[str]:
    """Headers of a Scores Report that every recognized field can be read from."""

    return [aliases[0] for field, aliases in RECOGNIZED_HEADERS.items() if field != "full_name"]


@dataclass(frozen=True, slots=True)
class HeaderLayout:
    """Header row of one sheet resolved against ``RECOGNIZED_HEADERS``."""

    headers: Tuple[str, ...]
    positions: Mapping[str, int]

    @classmethod
    def from_headers(cls, headers: Sequence[str]) -> "HeaderLayout":
        positions: Dict[str, int] = {}
        for idx, header in enumerate(headers):
            field = _ALIAS_TO_FIELD.get(header)
            if field is not None:
                # Later duplicates win, like assigning keys in column order.
                positions[field] = idx
        return cls(headers=tuple(headers), positions=MappingProxyType(positions))

    @property
    def recognized(self) -> List[str]:
        return [self.headers[idx] for idx in sorted(self.positions.values())]

    @property
    def unrecognized(self) -> List[str]:
        used = set(self.positions.values())
        return [h for idx, h in enumerate(self.headers) if idx not in used and h]

    def missing_fields(self, fields: Sequence[str]) -> List[str]:
        return [f for f in fields if f not in self.positions]


@dataclass(frozen=True, slots=True)
class RawRow:
    """One data row of a sheet, positionally aligned with its header layout."""

    cells: Tuple[Any, ...]
    layout: HeaderLayout

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RawRow":
        """Build a row from ``header -> value`` pairs (insertion order kept)."""

        headers = [str(h) for h in values.keys()]
        return cls(cells=tuple(values.values()), layout=HeaderLayout.from_headers(headers))

    def value(self, field: str) -> Any:
        """Cell for a canonical field, ``""`` when the sheet lacks that header."""

        idx = self.layout.positions.get(field)
        if idx is None or idx >= len(self.cells):
            return ""
        return self.cells[idx]


__all__ = [
    "HeaderLayout",
    "RawRow",
    "RECOGNIZED_HEADERS",
    "SCORE_FIELDS",
    "scores_template_headers",
]
