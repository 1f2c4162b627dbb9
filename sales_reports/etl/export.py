import sys
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Union

import pandas as pd

from sales_reports.logger import setup_logger
from sales_reports.utils.output_paths import build_report_output_path

logger = setup_logger("etl.export")


def write_report_file(
    df: pd.DataFrame,
    report_name: str,
    output_dir: Union[str, Path],
    output_format: str = "csv",
) -> Path:
    """
    Write one report result to ``<output_dir>/<report_name>.<ext>``.
    The directory is created if it does not exist. Empty results still
    produce a file (header only for CSV, empty for JSON lines).
    """
    path = build_report_output_path(output_dir, report_name, output_format)
    logger.info(f"Writing {len(df)} rows of '{report_name}' to {path}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        if output_format == "csv":
            df.to_csv(path, index=False)
        elif output_format == "jsonl":
            if df.empty:
                path.write_text("")
            else:
                df.to_json(path, orient="records", lines=True, date_format="iso")
        else:
            raise ValueError(f"Cannot write report files in format '{output_format}'")

    except OSError as e:
        logger.error(f"Could not write '{report_name}' to {path}: {e}")
        raise

    logger.info(f"Successfully written: {path}")
    return path


def render_report_table(df: pd.DataFrame, report_name: str, stream: Optional[TextIO] = None) -> None:
    """Print a report as a plain-text table titled with its name."""
    stream = stream or sys.stdout
    title = report_name.replace("-", " ").title()
    stream.write(f"\n{title}\n{'=' * len(title)}\n")
    if df.empty:
        stream.write("(no rows)\n")
    else:
        stream.write(df.to_string(index=False, na_rep="-"))
        stream.write("\n")


def export_reports(
    results: Dict[str, pd.DataFrame],
    output_format: str,
    output_dir: Union[str, Path],
    stream: Optional[TextIO] = None,
) -> List[Path]:
    """
    Export every report result. Returns the written file paths (none for the
    table format, which goes to ``stream``).
    """
    if output_format == "table":
        for name, df in results.items():
            render_report_table(df, name, stream)
        return []

    return [write_report_file(df, name, output_dir, output_format) for name, df in results.items()]
