"""
ShipView API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Tests run against a real SQLite copy of the `Order Query` table
       (sqlite+aiosqlite), created and seeded per test in a temp directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── order_rows:      The seeded rows, in insertion order
    ├── seeded_engine:   AsyncEngine over a seeded SQLite file
    ├── broken_engine:   AsyncEngine whose database cannot be opened
    ├── app:             FastAPI app with seeded_engine attached
    ├── test_client:     HTTPX AsyncClient talking to `app`
    └── broken_client:   HTTPX AsyncClient whose app uses broken_engine
"""

import os
from datetime import date

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

# Keep the settings singleton away from any real database or .env values.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./shipview_test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from shipview_api.config import Settings  # noqa: E402
from shipview_api.main import create_app  # noqa: E402
from shipview_api.models.order import metadata, order_query  # noqa: E402


def make_order(ord_num, ship_date, status, business_unit, carrier, state="TX", qty=1):
    return {
        "Ord #": ord_num,
        "Cust Name": f"Customer {ord_num}",
        "Ship To City": "Springfield",
        "Ship To State": state,
        "Ship To Zip": "75001",
        "Ship To Country": "US",
        "Ship Date": ship_date,
        "Due Date": ship_date,
        "Corrected_Due_Date": None,
        "Order_Status": status,
        "Carrier": carrier,
        "Order Qty": qty,
        "Business Unit": business_unit,
        "Order Sub Status": None,
    }


# Newest ship date first: 1001, 1002, 1003, 1004, 1005, 1006
ORDERS = [
    make_order("ORD-1004", date(2024, 2, 1), "Open", "Industrial", None, state="FL", qty=3),
    make_order("ORD-1001", date(2024, 3, 10), "Shipped", "Industrial", "UPS", qty=10),
    make_order("ORD-1006", date(2023, 12, 30), "Shipped", "Industrial", "DHL", qty=1),
    make_order("ORD-1002", date(2024, 3, 5), "Open", "Retail", "FedEx", qty=5),
    make_order("ORD-1005", date(2024, 1, 15), "Backordered", None, "FedEx", state="FL", qty=12),
    make_order("ORD-1003", date(2024, 2, 20), "Shipped", "Retail", "UPS", state="CO", qty=7),
]


async def seed_engine(url, rows):
    engine = create_async_engine(url)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        if rows:
            await conn.execute(order_query.insert(), rows)
    return engine


# "Cust Name" and "Carrier" hold integers here, as a loosely typed source table may.
NUMERIC_TEXT_COLUMNS_DDL = """
CREATE TABLE "Order Query" (
    "Ord #" VARCHAR(50),
    "Cust Name" INTEGER,
    "Ship To City" VARCHAR,
    "Ship To State" VARCHAR,
    "Ship To Zip" VARCHAR,
    "Ship To Country" VARCHAR,
    "Ship Date" DATE,
    "Due Date" DATE,
    "Corrected_Due_Date" DATE,
    "Order_Status" VARCHAR,
    "Carrier" INTEGER,
    "Order Qty" INTEGER,
    "Business Unit" VARCHAR,
    "Order Sub Status" VARCHAR
)
"""


async def seed_numeric_text_columns(url):
    """One order whose customer name is 42 and whose carrier is 7."""
    engine = create_async_engine(url)
    async with engine.begin() as conn:
        await conn.execute(text(NUMERIC_TEXT_COLUMNS_DDL))
        await conn.execute(
            text(
                """INSERT INTO "Order Query" ("Ord #", "Cust Name", "Ship Date", "Order_Status",
                "Carrier", "Business Unit") VALUES ('ORD-7', 42, '2024-05-01', 'Open', 7, 'Retail')"""
            )
        )
    return engine


@pytest.fixture
def order_rows():
    return list(ORDERS)


@pytest_asyncio.fixture
async def seeded_engine(tmp_path, order_rows):
    """AsyncEngine over a SQLite file holding ORDERS."""
    engine = await seed_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}", order_rows)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def broken_engine(tmp_path):
    """AsyncEngine pointing into a directory that does not exist."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'orders.db'}")
    yield engine
    await engine.dispose()


@pytest.fixture
def test_settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:", log_level="WARNING")


@pytest.fixture
def app(test_settings, seeded_engine):
    application = create_app(test_settings)
    application.state.engine = seeded_engine
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def broken_client(test_settings, broken_engine):
    """Client whose app cannot reach its database."""
    application = create_app(test_settings)
    application.state.engine = broken_engine
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
