"""
ShipView API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn shipview_api.main:app) or `shipview-api`.
When:  Once at server startup; the returned app handles all requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────────────┐ ┌──────┐ │
    │  │  Req ID  │→│ Logging │→│ Origin Guard │→│ CORS │ │
    │  └──────────┘ └─────────┘ └──────────────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────────┐ ┌──────────────┐ ┌──────────────┐  │
    │  │ GET /health │ │ GET orders   │ │ GET filters  │  │
    │  └─────────────┘ └──────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ShipViewError→status_code │ Exception→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the database engine (connection pool) and store it on app.state

    Shutdown:
    1. Dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from shipview_api import __version__
from shipview_api.config import Settings, settings as default_settings
from shipview_api.database import create_db_engine, dispose_engine
from shipview_api.exceptions import ShipViewError
from shipview_api.middleware.logging import RequestLoggingMiddleware
from shipview_api.middleware.origin_guard import OriginGuardMiddleware, origin_prefix_regex
from shipview_api.middleware.request_id import RequestIDMiddleware, request_id_var
from shipview_api.routes import health, orders

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout, where the process supervisor collects it.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the connection pool for the lifetime of the process.

    If an engine is already attached to app.state (tests attach a SQLite
    engine), it is used as-is and left for its owner to dispose.
    """
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    logger.info("ShipView API starting up...")

    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        app.state.engine = create_db_engine(config)

    logger.info("ShipView API running on http://%s:%d", config.host, config.port)

    yield

    logger.info("ShipView API shutting down...")
    if owns_engine:
        await dispose_engine(app.state.engine)
        app.state.engine = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

    Handler hierarchy:
        ShipViewError (DatabaseQueryError, FilterLoadError, ...)
                           → exc.status_code, {"error", "message"}
        Exception          → 500, generic body, traceback logged
    """

    @app.exception_handler(ShipViewError)
    async def handle_shipview_error(request: Request, exc: ShipViewError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, exc.error, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred.",
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use instead of the environment-loaded singleton.

    Returns:
        Configured FastAPI instance. The engine is attached by the lifespan,
        or beforehand by the caller via `app.state.engine`.
    """
    config = config or default_settings

    app = FastAPI(
        title="ShipView API",
        description="Read-only, filtered, paginated access to shipment orders for the ShipView map.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.engine = None

    # Middleware executes in REVERSE order of addition.
    allowed_origins = config.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=origin_prefix_regex(allowed_origins),
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(OriginGuardMiddleware, allowed_origins=allowed_origins)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(orders.router)

    return app


app = create_app()


def main() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    uvicorn.run(
        "shipview_api.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
