from typing import List, Tuple

import numpy as np
import pandas as pd
from pandera.errors import SchemaErrors

from sales_reports.errors import ConfigurationError, MalformedRecord, MissingColumns
from sales_reports.logger import setup_logger
from .input_schemas import (
    DATE_COLUMNS,
    NUMERIC_COLUMNS,
    REQUIRED_NUMERIC_COLUMNS,
    SALES_RECORD_COLUMNS,
    WIDE_CHECK_FIELDS,
    sales_record_schema,
)

logger = setup_logger("validation.input")


def _describe_check(check: str) -> str:
    if check == "not_nullable":
        return "missing value"
    if check in WIDE_CHECK_FIELDS:
        return check.replace("_", " ")
    return f"failed check {check}"


def _cell(df: pd.DataFrame, row_index, field: str):
    value = df.at[row_index, field]
    return None if pd.isna(value) else value


def parse_sales_records(raw_df: pd.DataFrame) -> Tuple[pd.DataFrame, List[MalformedRecord]]:
    """
    Turn raw text cells into typed SalesRecord columns.

    Returns the parsed frame (rows that could not be parsed removed) and a
    MalformedRecord for every cell that could not be parsed.
    """
    missing = set(SALES_RECORD_COLUMNS) - set(raw_df.columns)
    if missing:
        raise MissingColumns(missing)

    df = raw_df[SALES_RECORD_COLUMNS].copy()
    errors: List[MalformedRecord] = []

    # --------------------------------------------------
    # Dates: mixed formats (ISO, US) are accepted
    # --------------------------------------------------
    for col in DATE_COLUMNS:
        parsed = pd.to_datetime(df[col], errors="coerce", format="mixed")
        for idx in df.index[df[col].notna() & parsed.isna()]:
            errors.append(MalformedRecord(int(idx), col, "not a valid date", df.at[idx, col]))
        df[col] = parsed

    # --------------------------------------------------
    # Measures
    # --------------------------------------------------
    for col in NUMERIC_COLUMNS:
        parsed = pd.to_numeric(df[col], errors="coerce").astype("float64")
        for idx in df.index[df[col].notna() & parsed.isna()]:
            errors.append(MalformedRecord(int(idx), col, "not a number", df.at[idx, col]))
        # "inf", "-Infinity" and friends parse as numbers
        non_finite = parsed.notna() & ~np.isfinite(parsed)
        for idx in df.index[non_finite]:
            errors.append(MalformedRecord(int(idx), col, "not a finite number", df.at[idx, col]))
        parsed = parsed.where(~non_finite)
        if col in REQUIRED_NUMERIC_COLUMNS:
            for idx in df.index[df[col].isna()]:
                errors.append(MalformedRecord(int(idx), col, "missing value"))
        df[col] = parsed.astype("float64")

    # No discount recorded means no discount applied
    df["discount"] = df["discount"].fillna(0.0)

    fractional = df["quantity"].notna() & (df["quantity"] != df["quantity"].round())
    for idx in df.index[fractional]:
        errors.append(MalformedRecord(int(idx), "quantity", "not a whole number", df.at[idx, "quantity"]))

    bad_rows = {err.row_index for err in errors}
    df = df.drop(index=list(bad_rows))
    df["quantity"] = df["quantity"].astype("int64")

    return df, errors


def _schema_failures(df: pd.DataFrame, err: SchemaErrors) -> List[MalformedRecord]:
    failed = err.failure_cases
    logger.warning(f"Errors summary:\n{failed.groupby(['column', 'check'], dropna=False).size()}")

    failed = failed.dropna(subset=["index"])
    if len(failed) != len(err.failure_cases):
        # Column-level failures (wrong dtype, missing column) cannot be pinned on a row
        raise err

    records = {}
    for case in failed.to_dict("records"):
        row_index = int(case["index"])
        check = str(case["check"])
        field = WIDE_CHECK_FIELDS.get(check, case["column"])
        key = (row_index, field, check)
        if key not in records:
            records[key] = MalformedRecord(row_index, field, _describe_check(check), _cell(df, row_index, field))
    return list(records.values())


def validate_sales_records(
    raw_df: pd.DataFrame,
    on_error: str = "skip",
) -> Tuple[pd.DataFrame, List[MalformedRecord]]:
    """
    Parse and validate raw sales rows into a SalesRecord table.

    on_error="skip" drops every malformed row and returns the clean table with
    the list of MalformedRecord found. on_error="abort" raises the first
    MalformedRecord (lowest row index) instead.
    """
    if on_error not in ("skip", "abort"):
        raise ConfigurationError(f"on_error must be 'skip' or 'abort', got '{on_error}'")

    logger.info(f"Starting sales record validation on {len(raw_df)} rows")

    df, errors = parse_sales_records(raw_df)

    try:
        df = sales_record_schema.validate(df, lazy=True)
    except SchemaErrors as err:
        errors.extend(_schema_failures(df, err))

    errors.sort(key=lambda e: (e.row_index, SALES_RECORD_COLUMNS.index(e.field)))

    if not errors:
        logger.info("Sales record validation passed")
        return df.reset_index(drop=True), errors

    if on_error == "abort":
        logger.error(f"Aborting load: {len(errors)} malformed field(s), first: {errors[0]}")
        raise errors[0]

    for error in errors:
        logger.warning(str(error))

    bad_rows = {err.row_index for err in errors}
    clean_df = df.drop(index=[idx for idx in bad_rows if idx in df.index])
    clean_df = sales_record_schema.validate(clean_df)  # re-validate clean data
    logger.info(f"Cleaned sales records: {len(clean_df)} rows remaining ({len(bad_rows)} dropped)")

    return clean_df.reset_index(drop=True), errors
