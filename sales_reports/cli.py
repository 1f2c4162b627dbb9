import argparse
import sys
from pathlib import Path
from typing import List, Optional

from sales_reports.config import ON_ERROR_POLICIES, OUTPUT_FORMATS, load_config
from sales_reports.errors import (
    ConfigurationError,
    MalformedRecord,
    MissingColumns,
    ReportValidationError,
    UnknownReport,
)
from sales_reports.logger import setup_logger
from sales_reports.pipeline import run_pipeline
from sales_reports.reports import available_reports

logger = setup_logger("cli")

EXIT_OK = 0
EXIT_DATA_ERROR = 1
EXIT_USAGE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sales-reports",
        description="Run descriptive sales reports over a sales CSV",
    )
    parser.add_argument("--config", type=Path, help="YAML config merged over the packaged defaults")
    parser.add_argument("--input", type=Path, help="Sales CSV to load")
    parser.add_argument(
        "--report",
        action="append",
        dest="reports",
        metavar="NAME",
        help="Report to run (repeatable, default: every report)",
    )
    parser.add_argument("--on-error", choices=ON_ERROR_POLICIES, help="Malformed row policy")
    parser.add_argument("--encoding", help="Text encoding of the input file (default: utf-8)")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, dest="output_format", help="Output format")
    parser.add_argument("--output-dir", type=Path, help="Directory for report files")
    parser.add_argument("--list", action="store_true", help="List available reports and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list:
        for name in available_reports():
            print(name)
        return EXIT_OK

    try:
        config = load_config(args.config).with_overrides(
            input_path=args.input,
            on_error=args.on_error,
            encoding=args.encoding,
            reports=tuple(args.reports) if args.reports else None,
            output_format=args.output_format,
            output_dir=args.output_dir,
        )
        result = run_pipeline(config)

    except (UnknownReport, ConfigurationError) as e:
        logger.error(f"✗ {e}")
        return EXIT_USAGE_ERROR

    except (MalformedRecord, MissingColumns, FileNotFoundError, UnicodeDecodeError) as e:
        logger.error(f"✗ Load failed: {e}")
        return EXIT_DATA_ERROR

    except ReportValidationError as e:
        logger.error(f"✗ {e}")
        return EXIT_DATA_ERROR

    if result.malformed:
        logger.warning(f"⚠ {len(result.malformed)} malformed field(s) were skipped")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
