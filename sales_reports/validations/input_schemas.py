from pandera.pandas import Check, Column, DataFrameSchema


# Column order of a loaded SalesRecord table
SALES_RECORD_COLUMNS = [
    # Identifiers
    "order_id",
    "customer_id",
    "product_id",
    # Dates
    "order_date",
    "ship_date",
    # Categorical
    "ship_mode",
    "segment",
    "country",
    "city",
    "state",
    "region",
    "category",
    "sub_category",
    # Descriptive
    "customer_name",
    "product_name",
    # Measures
    "sales",
    "quantity",
    "discount",
    "profit",
]

DATE_COLUMNS = ["order_date", "ship_date"]
NUMERIC_COLUMNS = ["sales", "quantity", "discount", "profit"]
REQUIRED_NUMERIC_COLUMNS = ["sales", "quantity", "profit"]

# Dataframe-wide checks are reported against the field they constrain
WIDE_CHECK_FIELDS = {
    "ship_date_not_before_order_date": "ship_date",
    "profit_not_above_sales": "profit",
}


sales_record_schema = DataFrameSchema(
    {
        # Identifiers (opaque strings)
        "order_id": Column(str, nullable=False),
        "customer_id": Column(str, nullable=True),
        "product_id": Column(str, nullable=True),

        # Dates (parsed before validation)
        "order_date": Column("datetime64[ns]", nullable=False),
        "ship_date": Column("datetime64[ns]", nullable=False),

        # Grouping keys: every record belongs to exactly one of each
        "ship_mode": Column(str, nullable=True),
        "segment": Column(str, nullable=False),
        "country": Column(str, nullable=True),
        "city": Column(str, nullable=True),
        "state": Column(str, nullable=True),
        "region": Column(str, nullable=False),
        "category": Column(str, nullable=False),
        "sub_category": Column(str, nullable=False),

        # Free text
        "customer_name": Column(str, nullable=True),
        "product_name": Column(str, nullable=True),

        # Measures
        "sales": Column(float, Check.ge(0), nullable=False),
        "quantity": Column(int, Check.gt(0), nullable=False),
        "discount": Column(float, Check.in_range(0, 1), nullable=False),
        "profit": Column(float, nullable=False),  # Signed: losses are negative
    },
    checks=[
        Check(lambda df: df["ship_date"] >= df["order_date"], name="ship_date_not_before_order_date"),
        Check(lambda df: df["profit"] <= df["sales"], name="profit_not_above_sales"),
    ],
    strict=True,
    ordered=True,
)
