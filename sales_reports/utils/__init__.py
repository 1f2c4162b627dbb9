"""
Shared utilities for the reporting runner.

Keep helpers here small and dependency-free.
"""

from .output_paths import build_report_output_path, report_file_name

__all__ = ["build_report_output_path", "report_file_name"]
