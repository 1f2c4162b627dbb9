"""
Pytest configuration and fixtures for reporting tests.

This file is automatically discovered by pytest and provides
shared fixtures and configuration for all test modules.
"""

import pytest
import pandas as pd
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sales_reports.validations.validate_inputs import validate_sales_records


SUPERSTORE_HEADER = (
    "Row ID,Order ID,Order Date,Ship Date,Ship Mode,Customer ID,Customer Name,Segment,"
    "Country,City,State,Postal Code,Region,Product ID,Category,Sub-Category,Product Name,"
    "Sales,Quantity,Discount,Profit"
)

SUPERSTORE_ROWS = [
    "1,CA-2016-152156,11/8/2016,11/11/2016,Second Class,CG-12520,Claire Gute,Consumer,"
    "United States,Henderson,Kentucky,42420,South,FUR-BO-10001798,Furniture,Bookcases,"
    "Bush Somerset Collection Bookcase,261.96,2,0,41.9136",
    "2,CA-2016-152156,11/8/2016,11/11/2016,Second Class,CG-12520,Claire Gute,Consumer,"
    "United States,Henderson,Kentucky,42420,South,FUR-CH-10000454,Furniture,Chairs,"
    "\"Hon Deluxe Fabric Upholstered Stacking Chairs, Rounded Back\",731.94,3,0,219.582",
    "3,CA-2016-138688,6/12/2016,6/16/2016,Second Class,DV-13045,Darrin Van Huff,Corporate,"
    "United States,Los Angeles,California,90036,West,OFF-LA-10000240,Office Supplies,Labels,"
    "Self-Adhesive Address Labels for Typewriters by Universal,14.62,2,0,6.8714",
    "4,US-2015-108966,10/11/2015,10/18/2015,Standard Class,SO-20335,Sean O'Donnell,Consumer,"
    "United States,Fort Lauderdale,Florida,33311,South,FUR-TA-10000577,Furniture,Tables,"
    "Bretford CR4500 Series Slim Rectangular Table,957.5775,5,0.45,-383.031",
    "5,US-2015-108966,10/11/2015,10/18/2015,Standard Class,SO-20335,Sean O'Donnell,Consumer,"
    "United States,Fort Lauderdale,Florida,33311,South,OFF-ST-10000760,Office Supplies,Storage,"
    "Eldon Fold 'N Roll Cart System,22.368,2,0.2,2.5164",
]

DEFAULT_RECORD = {
    "order_id": "CA-1",
    "customer_id": "C-1",
    "product_id": "P-1",
    "order_date": "2023-01-15",
    "ship_date": "2023-01-18",
    "ship_mode": "Standard Class",
    "segment": "Consumer",
    "country": "United States",
    "city": "Seattle",
    "state": "Washington",
    "region": "West",
    "category": "Furniture",
    "sub_category": "Chairs",
    "customer_name": "Ann Smith",
    "product_name": "Chair A",
    "sales": "100",
    "quantity": "1",
    "discount": "0",
    "profit": "10",
}


def build_raw_frame(rows):
    """Raw text frame with every SalesRecord column; None marks a blank cell."""
    records = []
    for row in rows:
        record = dict(DEFAULT_RECORD)
        record.update({k: (None if v is None else str(v)) for k, v in row.items()})
        records.append(record)
    return pd.DataFrame(records, columns=list(DEFAULT_RECORD), dtype=object)


@pytest.fixture
def raw_frame():
    """Factory fixture: list of field overrides -> raw text DataFrame."""
    return build_raw_frame


@pytest.fixture
def make_records():
    """Factory fixture: list of field overrides -> validated SalesRecord table."""

    def _make(rows):
        records, malformed = validate_sales_records(build_raw_frame(rows))
        assert malformed == []
        return records

    return _make


@pytest.fixture
def empty_records():
    records, _ = validate_sales_records(build_raw_frame([]))
    return records


@pytest.fixture
def superstore_csv(tmp_path):
    """A five-row Superstore-style CSV on disk."""
    path = tmp_path / "superstore.csv"
    path.write_text("\n".join([SUPERSTORE_HEADER] + SUPERSTORE_ROWS) + "\n")
    return path


@pytest.fixture
def cp1252_csv(tmp_path):
    """Two products whose names differ only in a cp1252 accented byte."""
    path = tmp_path / "cp1252.csv"
    raw = build_raw_frame([
        {"order_id": "O1", "product_name": "Caf\xe9 Table"},
        {"order_id": "O2", "product_name": "Caf\xe8 Table"},
    ])
    raw.to_csv(path, index=False, encoding="cp1252")
    return path


@pytest.fixture
def four_row_records(make_records):
    """
    Two regions, two segments, known sales/profit.

    West:  100/20 (Consumer, C1), 200/-10 (Corporate, C2)
    East:  300/60 (Consumer, C3), 400/40  (Corporate, C2)
    """
    return make_records([
        {"order_id": "O1", "customer_id": "C1", "region": "West", "segment": "Consumer", "sales": 100, "profit": 20},
        {"order_id": "O2", "customer_id": "C2", "region": "West", "segment": "Corporate", "sales": 200, "profit": -10},
        {"order_id": "O3", "customer_id": "C3", "region": "East", "segment": "Consumer", "sales": 300, "profit": 60},
        {"order_id": "O4", "customer_id": "C2", "region": "East", "segment": "Corporate", "sales": 400, "profit": 40},
    ])


# Add pytest CLI options
def pytest_addoption(parser):
    """Add custom pytest options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests (requires SALES_REPORTS_DATASET to point at a sales CSV)"
    )


def pytest_collection_modifyitems(config, items):
    """Mark integration tests for conditional execution."""
    if config.getoption("--integration"):
        # Run all tests
        return

    # Skip integration tests if flag not provided
    skip_integration = pytest.mark.skip(reason="need --integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
