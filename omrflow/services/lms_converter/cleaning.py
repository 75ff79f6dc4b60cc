"""Cell coercion helpers for LMS report ingestion."""

from __future__ import annotations

import math
import re
from typing import Any

import pandas as pd

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_optional_number(raw: Any, default: float = 0.0) -> float:
    """Parse the leading number of a score cell.

    Only the leading numeric prefix counts, so ``"80%"`` reads as 80 and
    ``"1_000"`` as 1. Missing cells, text without a leading number, zero,
    NaN and infinities all yield ``default``.
    """

    if _is_missing(raw) or isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _LEADING_NUMBER.match(str(raw))
        if match is None:
            return default
        value = float(match.group(0))
    if not math.isfinite(value) or value == 0:
        return default
    return value


def cell_text(raw: Any) -> str:
    """Render a cell as trimmed text; integral floats lose their ``.0``."""

    if _is_missing(raw):
        return ""
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw).strip()


__all__ = ["cell_text", "parse_optional_number"]
