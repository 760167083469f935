"""
ShipView API — Health Check Route
===================================

What:  Health check endpoint for monitoring and the access proxy.
How:   Runs `SELECT 1` on a pooled connection.
Who:   Called by uptime monitors and the process supervisor.

Status levels:
    ok:    Database reachable (HTTP 200)
    error: Database unreachable (HTTP 500, check error in `message`)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from shipview_api.database import get_engine
from shipview_api.schemas.order import HealthResponse
from shipview_api.services.order_service import driver_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={500: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(engine: AsyncEngine = Depends(get_engine)):
    """
    Check database connectivity.

    Returns:
        HealthResponse(status="ok", db="connected") on success, or a 500
        JSONResponse with status="error", db="disconnected" and the error text.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        message = driver_message(e)
        logger.warning("Health check: database unreachable: %s", message)
        body = HealthResponse(status="error", db="disconnected", message=message)
        return JSONResponse(status_code=500, content=body.model_dump())

    return HealthResponse(status="ok", db="connected")
