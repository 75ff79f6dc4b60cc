"""CLI demo for the LMS -> OMR conversion."""

# Module responsibilities:
# - Provide a CLI that converts a Scores Report (and optional roster) into the OMR upload file.
# - Generate placeholder sample files when requested paths do not exist.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd

from omrflow.core.errors import ConversionError
from omrflow.core.workspace import ensure_work_dirs
from omrflow.services.lms_converter import convert_lms_report
from omrflow_io.utils.log import get_logger

logger = get_logger("tools.demo_convert")


def _generate_scores_example(path: Path) -> None:
    data = pd.DataFrame(
        [
            {
                "Username": "S100",
                "First Name": "John",
                "Last Name": "Doe",
                "PHYSICS Score": 80,
                "CHEMISTRY Score": 70,
                "MATHS Score": 65,
                "No. Of Correct Answers": 18,
                "No. Of incorrect Answers": 4,
                "No. Of unanswered Questions": 2,
            },
            {
                "Username": "S101",
                "First Name": "Asha",
                "Last Name": "Rao",
                "PHYSICS Score": 55,
                "CHEMISTRY Score": "",
                "MATHS Score": 90,
                "No. Of Correct Answers": 15,
                "No. Of incorrect Answers": 6,
                "No. Of unanswered Questions": 3,
            },
        ]
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    data.to_excel(path, index=False)
    logger.info("Generated example scores report", extra={"path": str(path)})


def _generate_roster_example(path: Path) -> None:
    data = pd.DataFrame([{"Username": "S102", "Full Name": "Ravi Kumar"}])
    path.parent.mkdir(parents=True, exist_ok=True)
    data.to_csv(path, index=False)
    logger.info("Generated example roster", extra={"path": str(path)})


def ensure_examples(scores: Path, roster: Path | None) -> None:
    if not scores.exists():
        _generate_scores_example(scores)
    if roster is not None and not roster.exists():
        _generate_roster_example(roster)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="LMS -> OMR conversion demo")
    parser.add_argument("--scores", type=Path, default=Path("examples/scores_report.xlsx"))
    parser.add_argument("--roster", type=Path, default=Path("examples/not_attempted.csv"))
    parser.add_argument("--no-roster", action="store_true", help="Convert without a not-attempted roster")
    parser.add_argument("--out", type=Path, default=None, help="Output directory (default: work/out)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or sys.argv[1:])
    roster = None if args.no_roster else args.roster
    out_dir = args.out or ensure_work_dirs()["out"]

    try:
        ensure_examples(args.scores, roster)
        result = convert_lms_report(args.scores, out_dir, not_attempted=roster)
    except ConversionError as exc:
        logger.error("Conversion demo failed", extra={"error": exc.user_message})
        print(f"Error: {exc.user_message}", file=sys.stderr)
        return 1

    logger.info(
        "Conversion demo complete",
        extra={"output_file": result.output_path, "row_count": result.scored_rows + result.unscored_rows},
    )
    print(f"Scored rows: {result.scored_rows}")
    print(f"Not attempted rows: {result.unscored_rows}")
    print(f"Output: {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
