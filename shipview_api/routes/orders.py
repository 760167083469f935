"""
ShipView API — Order Route Handlers
=====================================

What:  Handles GET /api/orders (filtered page of orders) and GET /api/filters
       (dropdown values).
How:   Extracts query parameters into explicit models, delegates to
       OrderService, returns JSON.
Who:   Called by the ShipView map and its filter bar.

Every query parameter is declared as an optional string. limit and offset
are parsed leniently by PaginationWindow, so a malformed value never produces
a 422; it falls back to the default.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncEngine

from shipview_api.database import get_engine
from shipview_api.schemas.order import (
    ErrorResponse,
    FilterOptionsResponse,
    OrderFilters,
    OrderListResponse,
    PaginationWindow,
)
from shipview_api.services.order_service import order_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Orders"])


@router.get(
    "/orders",
    response_model=OrderListResponse,
    responses={
        200: {"description": "Page of orders and total match count", "model": OrderListResponse},
        500: {"description": "Database query failed", "model": ErrorResponse},
    },
    summary="List orders with filters and offset pagination",
    description=(
        "Returns orders sorted by ship date (newest first). All filters are optional "
        "and combined with AND. `total` counts every matching order regardless of "
        "limit/offset. limit defaults to 10000 and is capped at 50000."
    ),
)
async def list_orders(
    status: Optional[str] = Query(default=None, description="Order status equals"),
    business_unit: Optional[str] = Query(default=None, description="Business unit equals"),
    from_date: Optional[str] = Query(default=None, description="Ship date on or after (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(default=None, description="Ship date on or before (YYYY-MM-DD)"),
    state: Optional[str] = Query(default=None, description="Ship-to state equals"),
    limit: Optional[str] = Query(default=None, description="Page size (0-50000, default 10000)"),
    offset: Optional[str] = Query(default=None, description="Rows to skip (default 0)"),
    engine: AsyncEngine = Depends(get_engine),
) -> OrderListResponse:
    """
    List one page of orders.

    Example client usage:
        GET /api/orders?status=Shipped&state=TX
        GET /api/orders?from_date=2024-01-01&to_date=2024-01-31&limit=500&offset=500

    Each parameter takes a single value. When a key repeats, the last
    occurrence wins: `?status=Open&status=Shipped` filters on Shipped alone,
    and `?limit=5&limit=20` pages by 20. Lists are never matched with IN.

    Error responses (handled by global exception handlers):
        HTTP 500: {"error": "Database query failed", "message": <driver error>}
    """
    filters = OrderFilters(
        status=status,
        business_unit=business_unit,
        from_date=from_date,
        to_date=to_date,
        state=state,
    )
    window = PaginationWindow.from_query(limit=limit, offset=offset)

    return await order_service.list_orders(engine=engine, filters=filters, window=window)


@router.get(
    "/filters",
    response_model=FilterOptionsResponse,
    responses={
        200: {"description": "Distinct filter values", "model": FilterOptionsResponse},
        500: {"description": "Failed to load filters", "model": ErrorResponse},
    },
    summary="Distinct values for the filter dropdowns",
)
async def list_filters(
    engine: AsyncEngine = Depends(get_engine),
) -> FilterOptionsResponse:
    """Distinct, non-null, sorted statuses, business units and carriers."""
    return await order_service.list_filter_options(engine=engine)
