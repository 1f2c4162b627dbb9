"""
Sales reporting run.

Stages:
1. Extract: read the sales CSV and normalize its headers
2. Validate: parse and check every row (skip or abort on malformed rows)
3. Report: run the selected aggregation reports
4. Validate: check every result against its output schema
5. Export: write CSV / JSON lines files or print tables
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, TextIO

import pandas as pd

from sales_reports.config import ReportConfig
from sales_reports.errors import MalformedRecord
from sales_reports.etl.export import export_reports
from sales_reports.etl.extract_csv import extract_sales_records
from sales_reports.logger import set_log_level, setup_logger
from sales_reports.reports import run_reports
from sales_reports.validations.validate_inputs import validate_sales_records
from sales_reports.validations.validate_outputs import validate_report_output

logger = setup_logger("pipeline")


@dataclass
class PipelineResult:
    records: int
    reports: Dict[str, pd.DataFrame]
    malformed: List[MalformedRecord] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)


def load_sales_records(config: ReportConfig) -> tuple:
    """Extract and validate the configured source. Returns (records, malformed)."""
    raw_df = extract_sales_records(config.input_path, encoding=config.encoding)
    records, malformed = validate_sales_records(raw_df, on_error=config.on_error)
    logger.info(f"✓ Loaded {len(records)} sales records ({len(malformed)} malformed field(s))")
    return records, malformed


def run_pipeline(config: ReportConfig, stream: Optional[TextIO] = None) -> PipelineResult:
    set_log_level(config.log_level)

    records, malformed = load_sales_records(config)

    results = run_reports(config.reports, records, config.precision)
    logger.info(f"✓ Ran {len(results)} report(s)")

    results = {name: validate_report_output(name, df) for name, df in results.items()}
    logger.info("✓ Output validation passed")

    written = export_reports(results, config.output_format, config.output_dir, stream)
    logger.info(f"✓ Reporting run complete: {len(results)} report(s), {len(written)} file(s) written")

    return PipelineResult(records=len(records), reports=results, malformed=malformed, written=written)
