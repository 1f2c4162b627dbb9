from pathlib import Path
from typing import Union

import pandas as pd

from sales_reports.logger import setup_logger

logger = setup_logger("etl.extract_csv")


def normalize_column_name(name: str) -> str:
    """
    Map a source header to its SalesRecord field name.

    Example:
        normalize_column_name(" Sub-Category ") -> "sub_category"
    """
    return name.strip().lower().replace(" ", "_").replace("-", "_")


def extract_sales_records(source: Union[str, Path], encoding: str = "utf-8") -> pd.DataFrame:
    """
    Read a sales CSV and return a DataFrame of raw text cells.
    Column names are normalized; values are left unparsed so validation can
    report exactly which row and field is malformed.

    Bytes that do not decode under ``encoding`` raise UnicodeDecodeError.
    """
    logger.info(f"Extracting sales records from {source} ({encoding})")
    try:
        sales_df = pd.read_csv(source, dtype=str, keep_default_na=False, encoding=encoding)
    except UnicodeDecodeError as e:
        logger.error(f"Could not decode {source} as {encoding}: {e}")
        raise
    logger.info(f"Successfully extracted {len(sales_df)} rows")

    sales_df.columns = [normalize_column_name(col) for col in sales_df.columns]
    logger.info(f"Normalized columns: {list(sales_df.columns)}")

    # Blank cells become nulls; everything else stays as text
    sales_df = sales_df.apply(lambda col: col.str.strip())
    sales_df = sales_df.where(sales_df != "")

    return sales_df
