"""
ShipView API — Application Package
====================================

Read-only HTTP gateway over the `Order Query` shipment table, serving the
ShipView mapping dashboard.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (query building/exec)    │  ← filters → SQL → records
    ├─────────────────────────────────────┤
    │    Models & Schemas (Data)          │  ← Core Table + Pydantic
    ├─────────────────────────────────────┤
    │   Database (connection pool)        │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
