"""
ShipView API — Origin Guard Middleware
========================================

What:  Rejects cross-origin requests from origins outside the allow-list.
How:   Compares the Origin header against allowed prefixes before the request
       reaches any route. A request with no Origin header (same-origin or
       non-browser callers such as curl and monitors) always passes.
Who:   Applied to every request, ahead of CORSMiddleware.

Matching is by prefix: with "https://shipview.pages.dev" allowed,
"https://shipview.pages.dev/foo" passes as well. CORSMiddleware then adds the
Access-Control-* headers for allowed origins; this middleware only decides
whether the request is served at all.
"""

import logging
import re
from typing import Iterable, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from shipview_api.exceptions import OriginNotAllowedError

logger = logging.getLogger(__name__)


def is_origin_allowed(origin: Optional[str], allowed_prefixes: Iterable[str]) -> bool:
    """True for a missing Origin or one starting with an allowed prefix."""
    if not origin:
        return True
    return any(origin.startswith(prefix) for prefix in allowed_prefixes)


def origin_prefix_regex(allowed_prefixes: Iterable[str]) -> str:
    """
    Regex for CORSMiddleware(allow_origin_regex=...) matching the same prefixes.

    Starlette full-matches the pattern, hence the trailing `.*`.
    """
    alternatives = "|".join(re.escape(prefix) for prefix in allowed_prefixes)
    return f"(?:{alternatives}).*"


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """
    Prefix-based Origin allow-list.

    Response on rejection:
        HTTP 403 {"error": "Not allowed by CORS", "message": "Origin '...' is not allowed"}
    """

    def __init__(self, app: ASGIApp, allowed_origins: List[str]):
        super().__init__(app)
        self.allowed_origins = list(allowed_origins)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, self.allowed_origins):
            exc = OriginNotAllowedError(origin=origin)
            logger.warning("Rejected request from origin %s to %s", origin, request.url.path)
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

        return await call_next(request)
