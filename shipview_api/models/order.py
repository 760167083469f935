"""
ShipView API — Order Query Table Definition
=============================================

What:  SQLAlchemy Core description of the externally owned `Order Query` table.
How:   A plain Table on its own MetaData. This service never creates, alters
       or writes the table; the definition exists so queries can be composed
       with SQLAlchemy expressions and so the dialect quotes the column names
       (most of them contain spaces or '#').
Who:   Used by the query builder and OrderService. Tests call
       `metadata.create_all()` against SQLite to build a fixture copy.

Export mapping:
    The API renames every column to a snake_case public field. EXPORT_FIELDS
    keeps the order of the JSON records returned by GET /api/orders.
"""

from typing import List, Tuple

from sqlalchemy import Column, Date, Integer, MetaData, String, Table

metadata = MetaData()

order_query = Table(
    "Order Query",
    metadata,
    Column("Ord #", String(50)),
    Column("Cust Name", String(255)),
    Column("Ship To City", String(100)),
    Column("Ship To State", String(50)),
    Column("Ship To Zip", String(20)),
    Column("Ship To Country", String(50)),
    Column("Ship Date", Date),
    Column("Due Date", Date),
    Column("Corrected_Due_Date", Date),
    Column("Order_Status", String(50)),
    Column("Carrier", String(100)),
    Column("Order Qty", Integer),
    Column("Business Unit", String(100)),
    Column("Order Sub Status", String(100)),
)

# (column name, public field name)
EXPORT_FIELDS: List[Tuple[str, str]] = [
    ("Ord #", "ord_num"),
    ("Cust Name", "cust_name"),
    ("Ship To City", "ship_to_city"),
    ("Ship To State", "ship_to_state"),
    ("Ship To Zip", "ship_to_zip"),
    ("Ship To Country", "ship_to_country"),
    ("Ship Date", "ship_date"),
    ("Due Date", "due_date"),
    ("Corrected_Due_Date", "corrected_due_date"),
    ("Order_Status", "order_status"),
    ("Carrier", "carrier"),
    ("Order Qty", "order_qty"),
    ("Business Unit", "business_unit"),
    ("Order Sub Status", "order_sub_status"),
]


def export_columns():
    """Selectable columns labelled with their public field names."""
    return [order_query.c[name].label(field) for name, field in EXPORT_FIELDS]


# Sort key for the order list: newest ship date first.
SHIP_DATE = order_query.c["Ship Date"]
