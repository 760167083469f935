"""
ShipView API — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the failure modes of the API.
How:   Each exception carries a fixed `error` label, an HTTP status code, a
       message and an optional context dict. Global handlers registered in
       main.py turn them into `{"error": ..., "message": ...}` JSON bodies.
Who:   Raised by services and middleware; caught by global handlers.

Exception Hierarchy:
    ShipViewError (base)
    ├── DatabaseQueryError     → 500 "Database query failed"
    ├── FilterLoadError        → 500 "Failed to load filters"
    └── OriginNotAllowedError  → 403 "Not allowed by CORS"

The `message` of a database error is the driver's own error text. The
dashboard shows it to operators, so it is returned as-is.
"""

from typing import Any, Dict, Optional


class ShipViewError(Exception):
    """
    Base exception for all ShipView application errors.

    Attributes:
        error:       Fixed, generic label for the failure class
        status_code: HTTP status used by the global handler
        message:     Detail returned alongside the label
        context:     Additional debug info (logged, NOT returned to client)
    """

    error: str = "Internal server error"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error, "message": self.message}


class DatabaseQueryError(ShipViewError):
    """
    Raised when the order row query or its count query fails.

    When:    Connection refused, pool checkout failure, SQL error, lost
             connection mid-query.
    HTTP:    500 Internal Server Error

    No partial result survives: if the row query succeeded but the count
    failed, the rows are discarded.
    """

    error = "Database query failed"


class FilterLoadError(ShipViewError):
    """Raised when any of the DISTINCT filter-option queries fails (HTTP 500)."""

    error = "Failed to load filters"


class OriginNotAllowedError(ShipViewError):
    """
    Raised for a browser request whose Origin is not on the allow-list.

    HTTP:    403 Forbidden, returned by OriginGuardMiddleware before routing.
    """

    error = "Not allowed by CORS"
    status_code = 403

    def __init__(self, origin: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["origin"] = origin
        super().__init__(message=f"Origin '{origin}' is not allowed", context=ctx)
        self.origin = origin
