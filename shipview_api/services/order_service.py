"""
ShipView API — Order Service (Query Executor & Filter Enumerator)
===================================================================

What:  Runs the read queries behind GET /api/orders and GET /api/filters.
How:   Composes SQLAlchemy Core statements over the `Order Query` table,
       checks a pooled connection out for each statement, and shapes rows
       into response models.
Who:   Called by route handlers; receives the engine from them.

Order listing (two round trips):
    ┌────────────┐    ┌──────────────────────────┐    ┌──────────────┐
    │  Filters   │───▶│ SELECT ... WHERE ...     │───▶│  data (page) │
    │ (builder)  │    │ ORDER BY Ship Date DESC  │    └──────────────┘
    │            │    │ LIMIT :limit OFFSET :off │
    │            │    └──────────────────────────┘
    │            │    ┌──────────────────────────┐    ┌──────────────┐
    │            │───▶│ SELECT COUNT(*) WHERE ...│───▶│  total       │
    └────────────┘    └──────────────────────────┘    └──────────────┘

    Both statements share one WHERE expression built from one predicate list,
    so the page and the total always describe the same set of rows. The count
    statement has no LIMIT/OFFSET and therefore binds only predicate values.

Error Handling Strategy:
    Any exception from either round trip is logged and re-raised as
    DatabaseQueryError (orders) or FilterLoadError (filters), carrying the
    driver's message. Nothing already fetched is returned.
"""

import logging
from typing import Any, List

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine

from shipview_api.exceptions import DatabaseQueryError, FilterLoadError
from shipview_api.models.order import SHIP_DATE, export_columns, order_query
from shipview_api.schemas.order import (
    FilterOptionsResponse,
    OrderFilters,
    OrderListResponse,
    OrderRecord,
    PaginationWindow,
)
from shipview_api.services.query_builder import (
    bound_values,
    build_predicates,
    build_where_clause,
)

logger = logging.getLogger(__name__)

# (response key, column) for the filter dropdowns
FILTER_OPTION_COLUMNS = [
    ("statuses", "Order_Status"),
    ("business_units", "Business Unit"),
    ("carriers", "Carrier"),
]


def driver_message(exc: BaseException) -> str:
    """
    The underlying driver's error text.

    SQLAlchemy wraps DBAPI errors and appends SQL and a docs link to the
    message; `orig` holds the driver's own exception.
    """
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class OrderService:
    """
    Read-only access to the `Order Query` table.

    Responsibilities:
        - list_orders(): filtered, paginated order rows plus total count
        - list_filter_options(): distinct values for the dashboard dropdowns

    Stateless: the engine is passed to every call.
    """

    async def list_orders(
        self,
        engine: AsyncEngine,
        filters: OrderFilters,
        window: PaginationWindow,
    ) -> OrderListResponse:
        """
        Fetch one page of orders and the total number of matching orders.

        Args:
            engine:  Engine owning the connection pool
            filters: Optional filter values from the query string
            window:  Already-clamped limit/offset

        Returns:
            OrderListResponse with data sorted by ship date descending.

        Raises:
            DatabaseQueryError: Either query failed.
        """
        predicates = build_predicates(filters)
        where = build_where_clause(predicates)

        rows_stmt = select(*export_columns()).select_from(order_query)
        count_stmt = select(func.count().label("total")).select_from(order_query)
        if where is not None:
            rows_stmt = rows_stmt.where(where)
            count_stmt = count_stmt.where(where)
        rows_stmt = (
            rows_stmt.order_by(SHIP_DATE.desc())
            .limit(window.limit)
            .offset(window.offset)
        )

        logger.debug(
            "Listing orders: filters=%s values=%s limit=%d offset=%d",
            [p.field for p in predicates],
            bound_values(predicates),
            window.limit,
            window.offset,
        )

        try:
            async with engine.connect() as conn:
                result = await conn.execute(rows_stmt)
                rows = result.mappings().all()

            async with engine.connect() as conn:
                count_result = await conn.execute(count_stmt)
                total = count_result.scalar_one()
        except Exception as e:
            logger.error("Query error: %s", driver_message(e), exc_info=True)
            raise DatabaseQueryError(
                message=driver_message(e),
                context={"error_type": type(e).__name__},
            ) from e

        return OrderListResponse(
            data=[OrderRecord.model_validate(dict(row)) for row in rows],
            total=int(total),
            limit=window.limit,
            offset=window.offset,
        )

    async def list_filter_options(self, engine: AsyncEngine) -> FilterOptionsResponse:
        """
        Distinct non-null values for status, business unit and carrier.

        One round trip per column, run in sequence. The first failure aborts
        the whole call; no partial option set is returned.

        Raises:
            FilterLoadError: Any of the three queries failed.
        """
        options = {}
        try:
            for key, column_name in FILTER_OPTION_COLUMNS:
                options[key] = await self._distinct_values(engine, column_name)
        except Exception as e:
            logger.error("Filter query error: %s", driver_message(e), exc_info=True)
            raise FilterLoadError(
                message=driver_message(e),
                context={"error_type": type(e).__name__},
            ) from e

        return FilterOptionsResponse(**options)

    async def _distinct_values(self, engine: AsyncEngine, column_name: str) -> List[Any]:
        column = order_query.c[column_name]
        stmt = (
            select(column.label("value"))
            .distinct()
            .where(column.is_not(None))
            .order_by(column)
        )
        async with engine.connect() as conn:
            result = await conn.execute(stmt)
            return list(result.scalars().all())


order_service = OrderService()
