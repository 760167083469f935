"""
ShipView API — Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract with the ShipView dashboard.
How:   Query-string input is gathered into explicit models (OrderFilters,
       PaginationWindow) before it reaches the query layer; responses are
       serialized through the response models below.
Who:   Used by route handlers and OrderService.
"""

import re
from typing import Any, List, Optional

from pydantic import BaseModel, Field

DEFAULT_LIMIT = 10_000
MAX_LIMIT = 50_000
DEFAULT_OFFSET = 0

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ══════════════════════════════════════════════════════════════════════════
# Query Parameter Models: What the client sends in URL params
# ══════════════════════════════════════════════════════════════════════════


class OrderFilters(BaseModel):
    """
    Optional filter values for GET /api/orders.

    Every field is a raw query-string value. None or "" means no constraint on
    that column. Values are not type-checked: a from_date of "yesterday" is
    bound as-is and compared by the database.

    Unknown keys are ignored, so `OrderFilters.model_validate(query_params)`
    accepts a full request query mapping.
    """

    status: Optional[str] = Field(default=None, description="Order status equals")
    business_unit: Optional[str] = Field(default=None, description="Business unit equals")
    from_date: Optional[str] = Field(default=None, description="Ship date on or after")
    to_date: Optional[str] = Field(default=None, description="Ship date on or before")
    state: Optional[str] = Field(default=None, description="Ship-to state equals")

    model_config = {"extra": "ignore"}


def _parse_int(raw: Optional[str]) -> Optional[int]:
    """Leading-integer parse: "25" → 25, "25abc" → 25, "abc" → None."""
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


class PaginationWindow(BaseModel):
    """
    The (limit, offset) pair bounding which matching rows are returned.

    Invariants:
        0 <= limit <= MAX_LIMIT
        offset >= 0

    The window applies to the row query only, never to the count.
    """

    limit: int = Field(default=DEFAULT_LIMIT, ge=0, le=MAX_LIMIT)
    offset: int = Field(default=DEFAULT_OFFSET, ge=0)

    @classmethod
    def from_query(
        cls, limit: Optional[str] = None, offset: Optional[str] = None
    ) -> "PaginationWindow":
        """
        Build a window from raw query-string values. Never raises.

        Missing or unparseable values fall back to the defaults. limit is
        clamped to [0, MAX_LIMIT] and offset to >= 0, so limit=999999 yields
        the same window as limit=50000.
        """
        parsed_limit = _parse_int(limit)
        parsed_offset = _parse_int(offset)

        if parsed_limit is None:
            parsed_limit = DEFAULT_LIMIT
        parsed_limit = max(0, min(parsed_limit, MAX_LIMIT))

        if parsed_offset is None:
            parsed_offset = DEFAULT_OFFSET
        parsed_offset = max(0, parsed_offset)

        return cls(limit=parsed_limit, offset=parsed_offset)


# ══════════════════════════════════════════════════════════════════════════
# Response Models: What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════

# Column types belong to the external table; values pass through unchecked.
ColumnValue = Any


class OrderRecord(BaseModel):
    """
    One row of `Order Query`, renamed to public field names.

    Types mirror whatever the database returns. A column named like text may
    hold numbers and the row is still served. Nothing is coerced beyond JSON
    serialization (dates become ISO 8601 strings, DECIMAL becomes a string).
    """

    ord_num: ColumnValue = None
    cust_name: ColumnValue = None
    ship_to_city: ColumnValue = None
    ship_to_state: ColumnValue = None
    ship_to_zip: ColumnValue = None
    ship_to_country: ColumnValue = None
    ship_date: ColumnValue = None
    due_date: ColumnValue = None
    corrected_due_date: ColumnValue = None
    order_status: ColumnValue = None
    carrier: ColumnValue = None
    order_qty: ColumnValue = None
    business_unit: ColumnValue = None
    order_sub_status: ColumnValue = None

    model_config = {"from_attributes": True}


class OrderListResponse(BaseModel):
    """
    What:  Page of orders plus the total number of matching orders.
    Who:   Returned by GET /api/orders.

    `total` counts every row matching the filters, ignoring limit/offset.
    `limit` and `offset` echo the effective (clamped) window.
    """

    data: List[OrderRecord] = Field(description="Orders in this page, newest ship date first")
    total: int = Field(description="Number of orders matching the filters")
    limit: int = Field(description="Effective page size")
    offset: int = Field(description="Effective number of skipped rows")


class FilterOptionsResponse(BaseModel):
    """Distinct, non-null, ascending values for the dashboard dropdowns."""

    statuses: List[ColumnValue] = Field(description="Distinct order statuses")
    business_units: List[ColumnValue] = Field(description="Distinct business units")
    carriers: List[ColumnValue] = Field(description="Distinct carriers")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body for every failing endpoint except /health.

    Example:
        {"error": "Database query failed", "message": "Unknown column 'x'"}
    """

    error: str = Field(description="Generic failure label")
    message: str = Field(description="Underlying error text")


class HealthResponse(BaseModel):
    """
    Health check body.

    Healthy:   {"status": "ok", "db": "connected"}
    Unhealthy: {"status": "error", "db": "disconnected", "message": "..."}
    """

    status: str = Field(description="ok or error")
    db: str = Field(description="connected or disconnected")
    message: Optional[str] = Field(default=None, description="Connectivity check failure text")
