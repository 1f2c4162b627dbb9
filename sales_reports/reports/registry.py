from typing import Callable, Dict, Iterable, Optional

import pandas as pd

from sales_reports.config import Precision
from sales_reports.errors import UnknownReport
from sales_reports.logger import setup_logger
from .aggregations import (
    category_profitability,
    discount_impact,
    monthly_trend,
    revenue_by_region,
    segment_breakdown,
    top_products,
)

logger = setup_logger("reports.registry")

ReportFunction = Callable[[pd.DataFrame, Precision], pd.DataFrame]

REPORTS: Dict[str, ReportFunction] = {
    "revenue-by-region": revenue_by_region,
    "top-products": top_products,
    "monthly-trend": monthly_trend,
    "category-profitability": category_profitability,
    "discount-impact": discount_impact,
    "segment-breakdown": segment_breakdown,
}


def available_reports() -> list:
    return list(REPORTS)


def get_report(name: str) -> ReportFunction:
    try:
        return REPORTS[name]
    except KeyError:
        raise UnknownReport(name, REPORTS) from None


def run_report(name: str, records: pd.DataFrame, precision: Precision = Precision()) -> pd.DataFrame:
    """
    Run one named report against the loaded records.

    Raises UnknownReport for a name that is not registered. An empty record
    set yields an empty frame with the report's columns.
    """
    report = get_report(name)
    logger.info(f"Running report '{name}' over {len(records)} records")
    result = report(records, precision)
    logger.info(f"Report '{name}' produced {len(result)} rows")
    return result


def run_reports(
    names: Optional[Iterable[str]],
    records: pd.DataFrame,
    precision: Precision = Precision(),
) -> Dict[str, pd.DataFrame]:
    """
    Run several reports, in the order given. None or an empty selection runs
    every report. All names are checked before any report runs.
    """
    selected = list(names) if names else available_reports()
    for name in selected:
        get_report(name)

    return {name: run_report(name, records, precision) for name in selected}
