from __future__ import annotations

import io
from pathlib import Path

import pytest
from openpyxl import load_workbook

from omrflow.core.errors import SerializationFailure
from omrflow.services.lms_converter import exporter
from omrflow.services.lms_converter.builder import build_output, build_row
from omrflow.services.lms_converter.models import NormalizedStudentRecord
from omrflow.services.lms_converter.schema import OUTPUT_SCHEMA


def _record(student_id: str, **scores) -> NormalizedStudentRecord:
    return NormalizedStudentRecord(student_id=student_id, student_name=f"Name {student_id}", **scores)


def test_build_row_maps_the_nine_fields() -> None:
    record = NormalizedStudentRecord(
        student_id="S1",
        student_name="A B",
        physics=10,
        chemistry=0,
        maths=5,
        biology=0,
        correct=3,
        wrong=1,
        unattempted=0,
    )

    row = build_row(record)

    assert len(row) == 250
    assert row[2] == "S1"
    assert row[3] == "A B"
    assert (row[7], row[8], row[9]) == (3, 1, 0)
    assert (row[10], row[18], row[26], row[34]) == (10, 0, 5, 0)
    assert row[0] == "" and row[1] == "" and row[11] == ""
    assert row[4] == 0


def test_build_row_leaves_everything_else_blank() -> None:
    row = build_row(_record("S1"))
    filled = {i for i, value in enumerate(row) if value != ""}
    assert filled == {2, 3, 4, 7, 8, 9, 10, 18, 26, 34}


def test_build_output_orders_scored_before_unscored() -> None:
    x, y, z = _record("X", physics=1), _record("Y", physics=2), _record("Z")

    rows = build_output([x, y], [z])

    assert [r[2] for r in rows] == ["X", "Y", "Z"]
    assert all(len(r) == len(OUTPUT_SCHEMA) for r in rows)


def test_build_output_empty_inputs() -> None:
    assert build_output([], []) == []


def test_serialize_output_prepends_header_rows() -> None:
    payload = exporter.serialize_output(build_output([_record("S1", correct=4)]))

    wb = load_workbook(io.BytesIO(payload))
    assert wb.sheetnames == ["OMR Upload"]
    rows = list(wb["OMR Upload"].iter_rows(values_only=True))
    assert list(rows[0]) == list(range(250))
    assert list(rows[1]) == list(OUTPUT_SCHEMA)
    assert rows[2][2] == "S1"
    assert rows[2][7] == 4
    assert len(rows) == 3


def test_serialize_output_rejects_wrong_width() -> None:
    with pytest.raises(SerializationFailure):
        exporter.serialize_output([["too", "short"]])


def test_serialize_output_wraps_writer_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken(rows, sheet_title):
        raise ValueError("bad cell")

    monkeypatch.setattr(exporter, "workbook_bytes", _broken)

    with pytest.raises(SerializationFailure) as excinfo:
        exporter.serialize_output([])
    assert "bad cell" in excinfo.value.user_message


def test_serialize_and_download_writes_fixed_filename(tmp_path: Path) -> None:
    path = exporter.serialize_and_download(build_output([_record("S1")]), tmp_path / "out")

    assert path == tmp_path / "out" / "OMR_Upload_Format.xlsx"
    assert path.exists()


def test_save_failure_becomes_serialization_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_space(data, out_path):
        raise OSError("No space left on device")

    monkeypatch.setattr(exporter, "save_bytes_atomic", _no_space)

    with pytest.raises(SerializationFailure):
        exporter.serialize_and_download([], tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_write_scores_template(tmp_path: Path) -> None:
    path = exporter.write_scores_template(tmp_path / "templates" / "scores.xlsx")

    wb = load_workbook(path)
    header = [c.value for c in next(wb.active.iter_rows(min_row=1, max_row=1))]
    assert header[0] == "Username"
    assert "No. Of Correct Answers" in header
