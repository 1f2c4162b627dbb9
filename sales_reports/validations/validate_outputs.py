import pandas as pd
from pandera.errors import SchemaErrors

from sales_reports.errors import ReportValidationError, UnknownReport
from sales_reports.logger import setup_logger
from .output_schemas import REPORT_SCHEMAS

logger = setup_logger("validation.output")


def validate_report_output(name: str, df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate a report result against its output schema before export.
    """
    if name not in REPORT_SCHEMAS:
        raise UnknownReport(name, REPORT_SCHEMAS)

    logger.info(f"Starting output validation of '{name}' on {len(df)} rows")

    try:
        validated_df = REPORT_SCHEMAS[name].validate(df, lazy=True)
        logger.info(f"Output validation of '{name}' passed")
        return validated_df

    except SchemaErrors as err:
        failed = err.failure_cases
        logger.error(f"Output validation of '{name}' failed with {len(failed)} issues")
        logger.error(f"Failure summary:\n{failed.groupby(['column', 'check'], dropna=False).size()}")
        raise ReportValidationError(name, str(failed)) from err
