"""
Health check endpoint for monitoring and orchestration.

Reports database connectivity and uptime. Always answers 200: a database
outage degrades the payload instead of failing the probe.
"""

import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from caixapdv.core.db import get_db
from caixapdv.core.logging import get_logger
from caixapdv.utils.datetime import now_utc, utc_isoformat

logger = get_logger(__name__)

router = APIRouter(tags=["health"])

# Global app start time (set in lifespan)
_app_start_time: datetime | None = None


def set_app_start_time(start_time: datetime) -> None:
    """Called by lifespan to track when app started."""
    global _app_start_time
    _app_start_time = start_time


def get_uptime_seconds() -> int:
    """Calculate seconds since app start."""
    if _app_start_time is None:
        return 0
    return int((datetime.now() - _app_start_time).total_seconds())


async def check_database(db: AsyncSession) -> dict[str, Any]:
    """
    Check database connectivity.

    Returns: {"status": "connected"|"disconnected", "response_time_ms": N, "error": str (if down)}
    """
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
        return {
            "status": "connected",
            "response_time_ms": int((time.time() - start) * 1000),
        }
    except Exception as e:
        logger.warning("health.database_unreachable", error_type=type(e).__name__)
        await db.rollback()
        return {
            "status": "disconnected",
            "response_time_ms": int((time.time() - start) * 1000),
            "error": type(e).__name__,
        }


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="API status, database connectivity and uptime. Returns 200 even when degraded.",
)
async def health_check(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """
    Health check endpoint.

    Example response (healthy):
        {
            "status": "online",
            "database": "connected",
            "timestamp": "2026-10-16T12:00:00.000Z",
            "uptime_seconds": 3600,
            "response_time_ms": 3
        }
    """
    db_check = await check_database(db)

    response = {
        "status": "online" if db_check["status"] == "connected" else "degraded",
        "database": db_check["status"],
        "timestamp": utc_isoformat(now_utc()),
        "uptime_seconds": get_uptime_seconds(),
        "response_time_ms": db_check["response_time_ms"],
    }
    if "error" in db_check:
        response["error"] = db_check["error"]

    return JSONResponse(content=response, status_code=status.HTTP_200_OK)
