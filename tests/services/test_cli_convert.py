"""CLI integration tests for the convert/schema/template commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from omrflow import cli


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


def test_convert_command_success(cli_runner: CliRunner, tmp_path: Path, scores_csv: bytes, make_csv) -> None:
    scores = tmp_path / "scores.csv"
    scores.write_bytes(scores_csv)
    roster = tmp_path / "absent.csv"
    roster.write_bytes(make_csv(["Username,Full Name", "S200,Absent One"]))
    out_dir = tmp_path / "out"

    result = cli_runner.invoke(
        cli.app,
        ["convert", "--scores", str(scores), "--not-attempted", str(roster), "--output", str(out_dir), "--no-report"],
    )

    assert result.exit_code == 0, result.output
    assert "OMR-compatible Excel file downloaded successfully!" in result.output
    assert "Students written: 2" in result.output
    assert (out_dir / "OMR_Upload_Format.xlsx").exists()
    assert not (out_dir / "omr_conversion_report.md").exists()


def test_convert_command_reports_missing_scores(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli.app, ["convert", "--output", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "Please upload the Scores Report file." in result.output
    assert not (tmp_path / "out").exists()


def test_convert_command_reports_empty_sheet(cli_runner: CliRunner, tmp_path: Path, make_csv) -> None:
    scores = tmp_path / "scores.csv"
    scores.write_bytes(make_csv(["Username,First Name"]))

    result = cli_runner.invoke(cli.app, ["convert", "-s", str(scores), "-o", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "Scores Report is empty or missing data." in result.output


def test_convert_command_uses_config_file(cli_runner: CliRunner, tmp_path: Path, scores_csv: bytes) -> None:
    scores = tmp_path / "scores.csv"
    scores.write_bytes(scores_csv)
    config = tmp_path / "converter.yaml"
    config.write_text("output_filename: Custom_Upload.xlsx\nwrite_report: false\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli.app,
        ["convert", "-s", str(scores), "-o", str(tmp_path / "out"), "--config", str(config)],
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "Custom_Upload.xlsx").exists()


def test_convert_command_rejects_bad_config(cli_runner: CliRunner, tmp_path: Path, scores_csv: bytes) -> None:
    scores = tmp_path / "scores.csv"
    scores.write_bytes(scores_csv)
    config = tmp_path / "converter.yaml"
    config.write_text("output_filename: upload.csv\n", encoding="utf-8")

    result = cli_runner.invoke(cli.app, ["convert", "-s", str(scores), "--config", str(config)])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_schema_command_mapped_only(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli.app, ["schema", "--mapped-only"])

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0] == "2\tRoll No"
    assert lines[-1] == "34\tBIOLOGY -Single Correct"
    assert len(lines) == 9


def test_schema_command_full_layout(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli.app, ["schema"])

    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 250


def test_scores_template_command(cli_runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "template.xlsx"

    result = cli_runner.invoke(cli.app, ["scores-template", "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert target.exists()


def test_unknown_log_level(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli.app, ["--log-level", "LOUD", "schema"])
    assert result.exit_code != 0
