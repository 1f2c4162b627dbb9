"""
Aggregation reports over the sales record table.
"""

from .registry import REPORTS, available_reports, get_report, run_report, run_reports

__all__ = ["REPORTS", "available_reports", "get_report", "run_report", "run_reports"]
