"""Fixed column layout of the OMR backend upload template."""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Tuple

OUTPUT_WIDTH = 250
QUESTION_COUNT = 60

SUMMARY_COLUMNS: Tuple[str, ...] = (
    "Exam",
    "Exam Set",
    "Roll No",
    "Name",
    "Total Marks",
    "Grade",
    "Rank",
    "Correct Answers",
    "Incorrect Answers",
    "Not attempted",
)

# Spacing and underscores are irregular in the template itself and must be
# reproduced verbatim.
SUBJECT_COLUMNS: Tuple[str, ...] = (
    "PHYSICS -Single Correct",
    "PHYSICS -Single Correct _Correct Answers",
    "PHYSICS -Single Correct _Incorrect Answers",
    "PHYSICS -Single Correct _Not attempted",
    "PHYSICS",
    "PHYSICS _Correct Answers",
    "PHYSICS _Incorrect Answers",
    "PHYSICS _Not attempted",
    "CHEMISTRY -Single Correct",
    "CHEMISTRY -Single Correct_Correct Answers",
    "CHEMISTRY -Single Correct_Incorrect Answers",
    "CHEMISTRY -Single Correct_Not attempted",
    "CHEMISTRY",
    "CHEMISTRY _Correct Answers",
    "CHEMISTRY _Incorrect Answers",
    "CHEMISTRY _Not attempted",
    "MATHS-Single Correct",
    "MATHS-Single Correct_Correct Answers",
    "MATHS-Single Correct_Incorrect Answers",
    "MATHS-Single Correct_Not attempted",
    "MATHS",
    "MATHS_Correct Answers",
    "MATHS_Incorrect Answers",
    "MATHS_Not attempted",
    "BIOLOGY -Single Correct",
    "BIOLOGY -Single Correct_Correct Answers",
    "BIOLOGY -Single Correct_Incorrect Answers",
    "BIOLOGY -Single Correct_Not attempted",
    "BIOLOGY",
    "BIOLOGY _Correct Answers",
    "BIOLOGY _Incorrect Answers",
    "BIOLOGY _Not attempted",
)


def _question_columns(count: int) -> Tuple[str, ...]:
    columns: List[str] = []
    for number in range(1, count + 1):
        columns.extend((f"Q {number} Options", f"Q {number} Key", f"Q {number} Marks"))
    return tuple(columns)


def _reserved_columns(start: int) -> Tuple[str, ...]:
    return tuple(f"Reserved {n}" for n in range(1, OUTPUT_WIDTH - start + 1))


_NAMED = SUMMARY_COLUMNS + SUBJECT_COLUMNS + _question_columns(QUESTION_COUNT)
OUTPUT_SCHEMA: Tuple[str, ...] = _NAMED + _reserved_columns(len(_NAMED))

# Record field -> output column index. Positions belong to the external
# template and change only together with it.
OUTPUT_COLUMNS: Mapping[str, int] = MappingProxyType(
    {
        "student_id": 2,
        "student_name": 3,
        "correct": 7,
        "wrong": 8,
        "unattempted": 9,
        "physics": 10,
        "chemistry": 18,
        "maths": 26,
        "biology": 34,
    }
)

_EXPECTED_NAMES: Mapping[str, str] = {
    "student_id": "Roll No",
    "student_name": "Name",
    "correct": "Correct Answers",
    "wrong": "Incorrect Answers",
    "unattempted": "Not attempted",
    "physics": "PHYSICS -Single Correct",
    "chemistry": "CHEMISTRY -Single Correct",
    "maths": "MATHS-Single Correct",
    "biology": "BIOLOGY -Single Correct",
}

TOTAL_MARKS_COLUMN = 4

# Numeric summary columns rendered as 0 instead of blank when unmapped.
ZERO_DEFAULT_COLUMNS: Tuple[int, ...] = (
    TOTAL_MARKS_COLUMN,
    OUTPUT_COLUMNS["correct"],
    OUTPUT_COLUMNS["wrong"],
    OUTPUT_COLUMNS["unattempted"],
    OUTPUT_COLUMNS["physics"],
    OUTPUT_COLUMNS["chemistry"],
    OUTPUT_COLUMNS["maths"],
    OUTPUT_COLUMNS["biology"],
)


class SchemaLayoutError(RuntimeError):
    """Raised at import when the column tables disagree with the template."""


def _validate_layout() -> None:
    if len(OUTPUT_SCHEMA) != OUTPUT_WIDTH:
        raise SchemaLayoutError(f"schema has {len(OUTPUT_SCHEMA)} columns, expected {OUTPUT_WIDTH}")
    if len(set(OUTPUT_SCHEMA)) != OUTPUT_WIDTH:
        raise SchemaLayoutError("schema column names must be unique")
    for field, index in OUTPUT_COLUMNS.items():
        if not 0 <= index < OUTPUT_WIDTH:
            raise SchemaLayoutError(f"{field} index {index} outside 0..{OUTPUT_WIDTH - 1}")
        if OUTPUT_SCHEMA[index] != _EXPECTED_NAMES[field]:
            raise SchemaLayoutError(
                f"{field} maps to {OUTPUT_SCHEMA[index]!r}, expected {_EXPECTED_NAMES[field]!r}"
            )
    for index in ZERO_DEFAULT_COLUMNS:
        if not 0 <= index < OUTPUT_WIDTH:
            raise SchemaLayoutError(f"zero-default index {index} outside 0..{OUTPUT_WIDTH - 1}")


_validate_layout()


def column_index_row() -> List[int]:
    """Machine-readable marker row ``0..OUTPUT_WIDTH-1`` required by the OMR backend."""

    return list(range(OUTPUT_WIDTH))


__all__ = [
    "OUTPUT_COLUMNS",
    "OUTPUT_SCHEMA",
    "OUTPUT_WIDTH",
    "QUESTION_COUNT",
    "SchemaLayoutError",
    "SUBJECT_COLUMNS",
    "SUMMARY_COLUMNS",
    "TOTAL_MARKS_COLUMN",
    "ZERO_DEFAULT_COLUMNS",
    "column_index_row",
]
