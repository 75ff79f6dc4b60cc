"""Reporting utilities for the converter."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .mapping import RECOGNIZED_HEADERS
from .models import ConversionSummary, SheetDiagnostics


def _header_names(fields: List[str]) -> List[str]:
    return [RECOGNIZED_HEADERS[f][0] for f in fields]


def _sheet_lines(diag: SheetDiagnostics) -> List[str]:
    lines = [f"## {diag.label}", ""]
    lines.append(f"- Data rows: {diag.data_rows}")
    lines.append(f"- Rows converted: {diag.kept_rows}")
    if diag.dropped_rows:
        rows = ", ".join(str(r) for r in diag.dropped_rows)
        lines.append(f"- Rows skipped (no Username): {len(diag.dropped_rows)} (sheet rows {rows})")
    if diag.missing_fields:
        lines.append(f"- Recognized columns not found: {', '.join(_header_names(diag.missing_fields))}")
    if diag.unrecognized_headers:
        lines.append(f"- Ignored columns: {', '.join(diag.unrecognized_headers)}")
    lines.append("")
    return lines


def generate_report(output_dir: Path, summary: ConversionSummary, output_path: Path, filename: str) -> Path:
    """Write a Markdown summary of one conversion next to the workbook."""

    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / filename

    lines = ["# OMR Conversion Report", ""]
    lines.append(f"- Output file: `{output_path.name}`")
    lines.append(f"- Student rows written: {summary.output_rows}")
    lines.append(f"- Rows skipped: {summary.dropped_rows}")
    lines.append("")

    for diag in (summary.scored, summary.unscored):
        if diag is not None:
            lines.extend(_sheet_lines(diag))

    report_path.write_text("\n".join(lines), encoding="utf-8")
    return report_path
