#!/usr/bin/env python3
"""
CLI for predicting title numbers from a street survey workbook.

Usage:
    python -m reporting.cli inspect <workbook>
    python -m reporting.cli predict <workbook> --target <house_no>

Examples:
    # List the samples and title types found in a workbook
    python -m reporting.cli inspect surveys/high_street.xlsx

    # Predict the title number for No. 24 using Freehold titles only
    python -m reporting.cli predict surveys/high_street.xlsx --target 24 --type Freehold

    # Same, and write an estimate sheet PDF
    python -m reporting.cli predict surveys/high_street.xlsx --target 24 --pdf
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from core.ingestion import CellParser, SampleSession, WorkbookError, load_samples
from core.title_engine import TitleEngineError
from utils.config import Config

from .estimate_pdf import EstimateReportGenerator


def load_session(path: Path, min_digits: int) -> SampleSession:
    """Read a workbook into a session. Raises WorkbookError."""
    parser = CellParser(min_title_digits=min_digits)
    result = load_samples(path.read_bytes(), path.name, parser)
    if result.skipped_columns:
        print(
            f"Warning: skipped {len(result.skipped_columns)} unreadable columns",
            file=sys.stderr,
        )
    return SampleSession.from_samples(result.samples)


def cmd_inspect(args):
    """List samples and title types found in a workbook."""
    input_path = Path(args.workbook)

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        session = load_session(input_path, args.min_digits)
    except WorkbookError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(f"Found {len(session.samples)} valid data pairs")
    for sample in session.samples:
        label = f"  [{sample.category_label}]" if sample.category_label else ""
        print(f"  House {sample.house_number:>5}  Title {sample.title_number}{label}")

    categories = session.categories
    if categories:
        print("Title types: " + ", ".join(categories.values()))
    return 0


def cmd_predict(args):
    """Predict the title number for a target house."""
    input_path = Path(args.workbook)

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        session = load_session(input_path, args.min_digits)
        outcome = session.predict(args.target, selected=args.types)
    except (WorkbookError, TitleEngineError) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    else:
        print(f"House Number: {outcome.target_house_number}")
        print(f"Calculated Title Number: {outcome.predicted_title_number}")
        print(f"Title types: {outcome.filter_description}")
        print(f"Let n = {outcome.transform_description}")
        print(f"Formula: {outcome.formula_text}")
        print(outcome.confidence_label)
        print(outcome.message)

    if args.pdf:
        generator = EstimateReportGenerator(output_dir=Path(args.output_dir))
        report = generator.generate_report(outcome)
        print(f"Report generated: {report.path}")

    return 0


def main(argv=None):
    """Main CLI entry point."""
    config = Config.load()
    logging.basicConfig(level=config.log_level)

    parser = argparse.ArgumentParser(
        description="Title Number Engine - predict land-registry title numbers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli inspect surveys/high_street.xlsx
    python -m reporting.cli predict surveys/high_street.xlsx --target 24

Output:
    Estimate sheets are saved to: reports/TITLE-<house_no>.pdf
        """,
    )
    parser.add_argument(
        "--min-digits",
        type=int,
        default=config.min_title_digits,
        help="Minimum digits for a title number (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="List samples and title types in a workbook",
    )
    inspect_parser.add_argument("workbook", help="Path to .xlsx survey workbook")
    inspect_parser.set_defaults(func=cmd_inspect)

    # Predict command
    predict_parser = subparsers.add_parser(
        "predict",
        help="Predict the title number for a house",
    )
    predict_parser.add_argument("workbook", help="Path to .xlsx survey workbook")
    predict_parser.add_argument(
        "--target",
        required=True,
        help="Target house number",
    )
    predict_parser.add_argument(
        "--type",
        dest="types",
        action="append",
        help="Only use this title type (repeatable; default: all)",
    )
    predict_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    predict_parser.add_argument(
        "--pdf",
        action="store_true",
        help="Also write an estimate sheet PDF",
    )
    predict_parser.add_argument(
        "--output-dir",
        default=config.reports_dir,
        help="Directory for PDF output (default: %(default)s)",
    )
    predict_parser.set_defaults(func=cmd_predict)

    args = parser.parse_args(argv)
    if args.min_digits < 1:
        parser.error("--min-digits must be at least 1")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
