"""Typer based command line entry points for omrflow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from omrflow.config import load_settings
from omrflow.core.errors import ConfigError, ConversionError
from omrflow.core.logger import get_logger
from omrflow.core.workspace import ensure_work_dirs
from omrflow.services.lms_converter import (
    OUTPUT_COLUMNS,
    OUTPUT_SCHEMA,
    convert_lms_report,
    write_scores_template,
)

EXIT_CONVERSION_FAILED = 1

app = typer.Typer(help="Convert LMS exam score reports into the OMR upload format.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logger = get_logger()
    logging.getLogger().setLevel(level_value)
    logger.setLevel(level_value)


@app.command("convert")
def cli_convert(
    scores: Optional[Path] = typer.Option(
        None,
        "--scores",
        "-s",
        help="LMS Scores Report (CSV/XLSX/XLS, required)",
        resolve_path=True,
        dir_okay=False,
    ),
    not_attempted: Optional[Path] = typer.Option(
        None,
        "--not-attempted",
        "-n",
        help="Optional roster of students who did not attempt the exam",
        resolve_path=True,
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Directory for the generated upload file (default: work/out)",
        resolve_path=True,
        file_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Converter settings YAML",
        exists=True,
        readable=True,
        resolve_path=True,
        dir_okay=False,
    ),
    report: Optional[bool] = typer.Option(
        None,
        "--report/--no-report",
        help="Write the Markdown conversion report (overrides settings)",
    ),
) -> None:
    """Generate OMR_Upload_Format.xlsx from an LMS Scores Report."""

    logger = get_logger()

    try:
        settings = load_settings(config)
    except ConfigError as exc:
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONVERSION_FAILED) from exc
    if report is not None:
        settings = settings.model_copy(update={"write_report": report})

    output_dir = output or ensure_work_dirs()["out"]

    try:
        result = convert_lms_report(
            scores_report=scores,
            output_dir=output_dir,
            not_attempted=not_attempted,
            settings=settings,
        )
    except ConversionError as exc:
        logger.error("Conversion failed: %s", exc.user_message)
        typer.secho(exc.user_message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONVERSION_FAILED) from exc

    typer.echo(result.message)
    typer.echo(f"Students written: {result.scored_rows + result.unscored_rows}")
    typer.echo(f"Scored rows: {result.scored_rows}")
    typer.echo(f"Not attempted rows: {result.unscored_rows}")
    if result.dropped_rows:
        typer.echo(f"Rows skipped (no Username): {result.dropped_rows}")
    typer.echo(f"Output: {result.output_path}")
    if result.report_path:
        typer.echo(f"Report: {result.report_path}")
    logger.info("CLI conversion completed: output=%s", result.output_path)


@app.command("schema")
def cli_schema(
    mapped_only: bool = typer.Option(False, "--mapped-only", help="Only list columns filled from the LMS report"),
) -> None:
    """Print the OMR upload column layout as ``index<TAB>name``."""

    if mapped_only:
        indices = sorted(OUTPUT_COLUMNS.values())
    else:
        indices = list(range(len(OUTPUT_SCHEMA)))
    for idx in indices:
        typer.echo(f"{idx}\t{OUTPUT_SCHEMA[idx]}")


@app.command("scores-template")
def cli_scores_template(
    output: Path = typer.Option(..., "--output", "-o", help="Path of the template workbook", resolve_path=True, dir_okay=False),
) -> None:
    """Write an empty Scores Report with every recognized header."""

    path = write_scores_template(output)
    typer.echo(f"Template: {path}")


if __name__ == "__main__":
    app()
