"""
ShipView API — Database Engine Management
===========================================

What:  Async SQLAlchemy engine (the connection pool) and its FastAPI dependency.
How:   create_db_engine() builds a bounded pool from settings. The app lifespan
       creates one engine at startup, stores it on app.state, and disposes it
       at shutdown. Route handlers receive it through Depends(get_engine).
Who:   Used by the lifespan in main.py and by every route that touches the DB.

Connection Pooling Strategy:
    pool_size=10:      Fixed number of persistent connections
    max_overflow=0:    Never open connections beyond pool_size
    pool_timeout=None: Callers wait for a free connection without a deadline
    pool_pre_ping:     Validates connections before use (catches stale ones)
    pool_recycle=3600: Recycles connections every hour

Each query checks a connection out with `async with engine.connect()` and
returns it when the block exits. No explicit transactions are opened; all
statements are single reads.
"""

import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from shipview_api.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def create_db_engine(config: Optional[Settings] = None) -> AsyncEngine:
    """
    Build the async engine that owns the connection pool.

    Args:
        config: Settings to read pool sizing and the URL from. Defaults to the
                module-level singleton.

    Returns:
        A new AsyncEngine. The caller owns it and must dispose it.
    """
    config = config or default_settings
    engine = create_async_engine(
        config.database_url_resolved,
        pool_size=config.db_pool_size,
        max_overflow=0,
        pool_timeout=config.db_pool_timeout,
        pool_pre_ping=True,
        pool_recycle=config.db_pool_recycle,
        echo=config.log_level == "DEBUG",
    )
    logger.info(
        "Database engine created: %s (pool_size=%d)",
        engine.url.render_as_string(hide_password=True),
        config.db_pool_size,
    )
    return engine


def get_engine(request: Request) -> AsyncEngine:
    """
    FastAPI dependency returning the engine owned by the running application.

    Example usage in a route:
        @router.get("/api/orders")
        async def list_orders(engine: AsyncEngine = Depends(get_engine)):
            ...
    """
    return request.app.state.engine


async def dispose_engine(engine: AsyncEngine) -> None:
    """Closes every pooled connection. Called from the lifespan on shutdown."""
    await engine.dispose()
    logger.info("Database engine disposed")
