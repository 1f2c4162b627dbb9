"""
Report aggregations over a loaded SalesRecord table.

Every function takes the validated records frame and returns a new frame;
the input is never modified. Ties in the ordering measure are broken by the
group keys ascending so results are deterministic.
"""

import numpy as np
import pandas as pd

from sales_reports.config import Precision

TOP_PRODUCTS_LIMIT = 10

# (label, upper bound inclusive); anything above the last bound is "Over 30%"
DISCOUNT_BUCKETS = [
    ("No Discount", 0.0),
    ("1-10%", 0.10),
    ("11-20%", 0.20),
    ("21-30%", 0.30),
]
OVER_LAST_BUCKET = "Over 30%"
DISCOUNT_BUCKET_LABELS = [label for label, _ in DISCOUNT_BUCKETS] + [OVER_LAST_BUCKET]


def safe_percentage(numerator: pd.Series, denominator: pd.Series, fill=0.0) -> pd.Series:
    """
    100 * numerator / denominator, with ``fill`` wherever the denominator is
    zero or null.
    """
    percentage = numerator / denominator.where(denominator != 0) * 100
    return percentage if fill is None else percentage.fillna(fill)


def _order(df: pd.DataFrame, by: list, ascending: list, columns: list) -> pd.DataFrame:
    return df.sort_values(by, ascending=ascending, kind="mergesort")[columns].reset_index(drop=True)


# --------------------------------------------------
# Revenue by region
# --------------------------------------------------
def revenue_by_region(records: pd.DataFrame, precision: Precision = Precision()) -> pd.DataFrame:
    grouped = records.groupby("region", as_index=False).agg(
        total_revenue=("sales", "sum"),
        total_profit=("profit", "sum"),
    )
    grouped["profit_margin"] = safe_percentage(grouped["total_profit"], grouped["total_revenue"])
    grouped = grouped.round(
        {
            "total_revenue": precision.currency,
            "total_profit": precision.currency,
            "profit_margin": precision.percentage,
        }
    )

    return _order(
        grouped,
        by=["total_revenue", "region"],
        ascending=[False, True],
        columns=["region", "total_revenue", "total_profit", "profit_margin"],
    )


# --------------------------------------------------
# Top products
# --------------------------------------------------
def top_products(
    records: pd.DataFrame,
    precision: Precision = Precision(),
    limit: int = TOP_PRODUCTS_LIMIT,
) -> pd.DataFrame:
    keys = ["product_name", "category", "sub_category"]
    grouped = records.groupby(keys, as_index=False, dropna=False).agg(
        total_sales=("sales", "sum"),
        total_quantity=("quantity", "sum"),
    )
    grouped["total_quantity"] = grouped["total_quantity"].astype("int64")
    grouped["total_sales"] = grouped["total_sales"].round(precision.currency)

    ranked = _order(
        grouped,
        by=["total_sales"] + keys,
        ascending=[False, True, True, True],
        columns=keys + ["total_sales", "total_quantity"],
    )
    return ranked.head(limit)


# --------------------------------------------------
# Monthly trend with previous-year comparison
# --------------------------------------------------
def monthly_trend(records: pd.DataFrame, precision: Precision = Precision()) -> pd.DataFrame:
    """
    Revenue per (year, month) of order date.

    prev_year_revenue is the revenue of the same month in the previous year
    present in the data for that month, which is not necessarily year - 1
    when the data has gaps. It is null for the first occurrence of a month.
    """
    months = pd.DataFrame(
        {
            "year": records["order_date"].dt.year.astype("int64"),
            "month": records["order_date"].dt.month.astype("int64"),
            "sales": records["sales"],
        }
    )
    grouped = months.groupby(["year", "month"], as_index=False).agg(monthly_revenue=("sales", "sum"))
    grouped = grouped.astype({"year": "int64", "month": "int64", "monthly_revenue": "float64"})

    # Previous row when partitioned by month and ordered by year
    by_month = grouped.sort_values(["month", "year"], kind="mergesort")
    grouped["prev_year_revenue"] = by_month.groupby("month")["monthly_revenue"].shift(1)

    grouped["yoy_growth_pct"] = safe_percentage(
        grouped["monthly_revenue"] - grouped["prev_year_revenue"],
        grouped["prev_year_revenue"],
        fill=None,
    )
    grouped = grouped.round(
        {
            "monthly_revenue": precision.currency,
            "prev_year_revenue": precision.currency,
            "yoy_growth_pct": precision.percentage,
        }
    )

    return _order(
        grouped,
        by=["year", "month"],
        ascending=[True, True],
        columns=["year", "month", "monthly_revenue", "prev_year_revenue", "yoy_growth_pct"],
    )


# --------------------------------------------------
# Category profitability
# --------------------------------------------------
def category_profitability(records: pd.DataFrame, precision: Precision = Precision()) -> pd.DataFrame:
    grouped = records.groupby(["category", "sub_category"], as_index=False).agg(
        total_orders=("order_id", "nunique"),
        total_sales=("sales", "sum"),
        total_profit=("profit", "sum"),
        avg_discount=("discount", "mean"),
    )
    grouped["total_orders"] = grouped["total_orders"].astype("int64")
    grouped["avg_discount_pct"] = grouped["avg_discount"] * 100
    grouped["profit_margin"] = safe_percentage(grouped["total_profit"], grouped["total_sales"])
    grouped = grouped.round(
        {
            "total_sales": precision.currency,
            "total_profit": precision.currency,
            "avg_discount_pct": precision.discount_percentage,
            "profit_margin": precision.percentage,
        }
    )

    return _order(
        grouped,
        by=["profit_margin", "category", "sub_category"],
        ascending=[False, True, True],
        columns=[
            "category",
            "sub_category",
            "total_orders",
            "total_sales",
            "total_profit",
            "avg_discount_pct",
            "profit_margin",
        ],
    )


# --------------------------------------------------
# Discount impact
# --------------------------------------------------
def discount_bucket(discount: pd.Series) -> pd.Series:
    """
    Map discount fractions to their bucket label.

    Upper bounds are inclusive: 0.10 is "1-10%", 0.30 is "21-30%".
    """
    conditions = [discount <= upper for _, upper in DISCOUNT_BUCKETS]
    labels = [label for label, _ in DISCOUNT_BUCKETS]
    return pd.Series(
        np.select(conditions, labels, default=OVER_LAST_BUCKET),
        index=discount.index,
        dtype=object,
    )


def discount_impact(records: pd.DataFrame, precision: Precision = Precision()) -> pd.DataFrame:
    bucketed = records.assign(discount_bucket=discount_bucket(records["discount"]))
    grouped = bucketed.groupby("discount_bucket", as_index=False).agg(
        total_orders=("order_id", "nunique"),
        avg_profit=("profit", "mean"),
        total_profit=("profit", "sum"),
        total_sales=("sales", "sum"),
    )
    grouped["total_orders"] = grouped["total_orders"].astype("int64")
    grouped["bucket_rank"] = grouped["discount_bucket"].map(DISCOUNT_BUCKET_LABELS.index)
    grouped = grouped.round(
        {
            "avg_profit": precision.currency,
            "total_profit": precision.currency,
            "total_sales": precision.currency,
        }
    )

    return _order(
        grouped,
        by=["avg_profit", "bucket_rank"],
        ascending=[False, True],
        columns=["discount_bucket", "total_orders", "avg_profit", "total_profit", "total_sales"],
    )


# --------------------------------------------------
# Segment breakdown
# --------------------------------------------------
def segment_breakdown(records: pd.DataFrame, precision: Precision = Precision()) -> pd.DataFrame:
    grouped = records.groupby("segment", as_index=False).agg(
        unique_customers=("customer_id", "nunique"),
        total_orders=("order_id", "nunique"),
        total_revenue=("sales", "sum"),
        avg_order_value=("sales", "mean"),
        total_profit=("profit", "sum"),
    )
    grouped["unique_customers"] = grouped["unique_customers"].astype("int64")
    grouped["total_orders"] = grouped["total_orders"].astype("int64")
    grouped["profit_margin"] = safe_percentage(grouped["total_profit"], grouped["total_revenue"])
    grouped = grouped.round(
        {
            "total_revenue": precision.currency,
            "avg_order_value": precision.currency,
            "profit_margin": precision.percentage,
        }
    )

    return _order(
        grouped,
        by=["total_revenue", "segment"],
        ascending=[False, True],
        columns=[
            "segment",
            "unique_customers",
            "total_orders",
            "total_revenue",
            "avg_order_value",
            "profit_margin",
        ],
    )
