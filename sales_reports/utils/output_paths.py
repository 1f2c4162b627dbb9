"""
Output path helpers.

Report file names are built in one place so every writer and the tests agree
on where a report lands.
"""

from pathlib import Path
from typing import Union

FILE_EXTENSIONS = {"csv": ".csv", "jsonl": ".jsonl"}


def report_file_name(report_name: str, output_format: str) -> str:
    """
    Example:
        report_file_name("revenue-by-region", "csv") -> "revenue-by-region.csv"
    """
    try:
        extension = FILE_EXTENSIONS[output_format]
    except KeyError:
        raise ValueError(f"No file extension for output format '{output_format}'") from None
    return f"{report_name.strip().strip('/')}{extension}"


def build_report_output_path(output_dir: Union[str, Path], report_name: str, output_format: str) -> Path:
    """
    Build the full path of a report file.

    Example:
        build_report_output_path("reports-output/", "top-products", "jsonl")
        -> Path("reports-output/top-products.jsonl")
    """
    return Path(output_dir) / report_file_name(report_name, output_format)
