"""
ShipView API — Access Log Middleware
======================================

What:  One access-log line per request, carrying the order-query context
       that explains the response.
How:   Times the downstream call, then logs on the `shipview.access` logger at
       a level picked from the status class. /api/orders lines carry the
       effective page window and the names of the applied filters; 403 lines
       carry the rejected Origin.
Who:   Applied to every request, inside RequestIDMiddleware.

Log lines:
    GET /api/orders -> 200 in 84.2ms [a1b2c3d4] limit=500 offset=0 filters=status,state
    GET /api/orders -> 403 in 0.4ms [c0ffee12] origin=https://evil.example
    GET /api/filters -> 500 in 12.0ms [9f8e7d6c]

Filter values are not logged, only which filters were applied.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shipview_api.middleware.request_id import request_id_var
from shipview_api.schemas.order import OrderFilters, PaginationWindow
from shipview_api.services.query_builder import build_predicates

logger = logging.getLogger("shipview.access")

ORDERS_PATH = "/api/orders"

# Polled by monitors every few seconds.
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def describe_request(request: Request, status: int) -> Dict[str, Any]:
    """
    Domain details for the access line, in display order.

    The window is parsed the same way the orders route parses it, so the
    logged limit/offset are the ones the query ran with.
    """
    details: Dict[str, Any] = {}

    if request.url.path == ORDERS_PATH and status != 403:
        params = request.query_params
        window = PaginationWindow.from_query(params.get("limit"), params.get("offset"))
        filters = OrderFilters.model_validate(dict(params))
        details["limit"] = window.limit
        details["offset"] = window.offset
        details["filters"] = ",".join(p.field for p in build_predicates(filters)) or "none"

    if status == 403:
        details["origin"] = request.headers.get("origin", "")

    return details


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access line once the response status is known."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        status = response.status_code
        rid = request_id_var.get("")
        details = describe_request(request, status)
        suffix = " ".join(f"{key}={value}" for key, value in details.items())

        logger.log(
            level_for_status(status),
            "%s %s -> %d in %.1fms [%s]%s",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            rid,
            f" {suffix}" if suffix else "",
            extra={"request_id": rid, "status": status, "elapsed_ms": round(elapsed_ms, 2), **details},
        )

        return response
