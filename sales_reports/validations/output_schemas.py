from pandera.pandas import Check, Column, DataFrameSchema

from sales_reports.reports.aggregations import DISCOUNT_BUCKET_LABELS, TOP_PRODUCTS_LIMIT


revenue_by_region_schema = DataFrameSchema(
    {
        "region": Column(str, nullable=False, unique=True),
        "total_revenue": Column(float, Check.ge(0), nullable=False),
        "total_profit": Column(float, nullable=False),
        "profit_margin": Column(float, nullable=False),
    },
    strict=True,
    ordered=True,
)


top_products_schema = DataFrameSchema(
    {
        "product_name": Column(str, nullable=True),
        "category": Column(str, nullable=False),
        "sub_category": Column(str, nullable=False),
        "total_sales": Column(float, Check.ge(0), nullable=False),
        "total_quantity": Column(int, Check.gt(0), nullable=False),
    },
    checks=Check(lambda df: len(df) <= TOP_PRODUCTS_LIMIT, name="at_most_top_limit"),
    strict=True,
    ordered=True,
)


monthly_trend_schema = DataFrameSchema(
    {
        "year": Column(int, nullable=False),
        "month": Column(int, Check.in_range(1, 12), nullable=False),
        "monthly_revenue": Column(float, Check.ge(0), nullable=False),
        # Null for the first year a month appears in
        "prev_year_revenue": Column(float, Check.ge(0), nullable=True),
        "yoy_growth_pct": Column(float, nullable=True),
    },
    unique=["year", "month"],
    strict=True,
    ordered=True,
)


category_profitability_schema = DataFrameSchema(
    {
        "category": Column(str, nullable=False),
        "sub_category": Column(str, nullable=False),
        "total_orders": Column(int, Check.gt(0), nullable=False),
        "total_sales": Column(float, Check.ge(0), nullable=False),
        "total_profit": Column(float, nullable=False),
        "avg_discount_pct": Column(float, Check.in_range(0, 100), nullable=False),
        "profit_margin": Column(float, nullable=False),
    },
    unique=["category", "sub_category"],
    strict=True,
    ordered=True,
)


discount_impact_schema = DataFrameSchema(
    {
        "discount_bucket": Column(str, Check.isin(DISCOUNT_BUCKET_LABELS), nullable=False, unique=True),
        "total_orders": Column(int, Check.gt(0), nullable=False),
        "avg_profit": Column(float, nullable=False),
        "total_profit": Column(float, nullable=False),
        "total_sales": Column(float, Check.ge(0), nullable=False),
    },
    strict=True,
    ordered=True,
)


segment_breakdown_schema = DataFrameSchema(
    {
        "segment": Column(str, nullable=False, unique=True),
        "unique_customers": Column(int, Check.ge(0), nullable=False),
        "total_orders": Column(int, Check.gt(0), nullable=False),
        "total_revenue": Column(float, Check.ge(0), nullable=False),
        "avg_order_value": Column(float, Check.ge(0), nullable=False),
        "profit_margin": Column(float, nullable=False),
    },
    strict=True,
    ordered=True,
)


REPORT_SCHEMAS = {
    "revenue-by-region": revenue_by_region_schema,
    "top-products": top_products_schema,
    "monthly-trend": monthly_trend_schema,
    "category-profitability": category_profitability_schema,
    "discount-impact": discount_impact_schema,
    "segment-breakdown": segment_breakdown_schema,
}
