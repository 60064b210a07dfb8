"""
Pocket Writer Backend — Ping & Health Routes
=============================================

What:  Liveness and health endpoints.
       GET /api/ping       → constant-time "server is up" answer
       GET /api/health     → aggregate of database + application components
       GET /api/health/db  → database check plus a table-count metric
Who:   /api/ping is the discovery client's steady-state check;
       /api/health* serve operators and monitoring.

Health Check Philosophy:
    The health endpoints always answer 200. A failing database shows up as
    status "DOWN" in the body so the mobile debug screen can render it;
    the endpoint itself never errors.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Tuple

from fastapi import APIRouter
from sqlalchemy import text

from pocketwriter.config import settings
from pocketwriter.database import engine
from pocketwriter.schemas.system import (
    ComponentHealth,
    DatabaseHealthResponse,
    HealthResponse,
    PingResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _now() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


async def check_database() -> Tuple[bool, str]:
    """Run SELECT 1 and report (healthy, human-readable validation message)."""
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            if result.scalar() == 1:
                return True, "Connection test successful"
            return False, "Connection test returned unexpected value"
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        return False, f"Connection test failed: {e}"


async def database_metrics() -> Dict[str, Any]:
    """Best-effort metrics; never raises."""
    try:
        async with engine.connect() as conn:
            if engine.dialect.name == "sqlite":
                query = "SELECT count(1) FROM sqlite_master WHERE type = 'table'"
            else:
                query = "SELECT count(1) FROM information_schema.tables"
            tables = (await conn.execute(text(query))).scalar() or 0
        return {"tables_count": tables, "connection_status": "active"}
    except Exception as e:
        logger.warning("Could not retrieve database metrics: %s", e)
        return {"error": f"Metrics unavailable: {e}"}


@router.get(
    "/ping",
    response_model=PingResponse,
    summary="Ping server",
)
async def ping() -> PingResponse:
    return PingResponse(timestamp=_now(), version=settings.app_version)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Overall health",
)
async def health_check() -> HealthResponse:
    """
    Aggregate health: UP only when every component is UP.

    Components:
        db:          SELECT 1 against the configured database
        application: always UP while the process can answer
    """
    db_ok, validation = await check_database()
    db_status = "UP" if db_ok else "DOWN"

    return HealthResponse(
        status=db_status,
        components={
            "db": ComponentHealth(
                status=db_status,
                details={"database": engine.dialect.name, "validation": validation},
            ),
            "application": ComponentHealth(
                status="UP",
                details={"name": settings.app_name, "version": settings.app_version},
            ),
        },
        timestamp=_now(),
    )


@router.get(
    "/health/db",
    response_model=DatabaseHealthResponse,
    summary="Database health",
)
async def database_health_check() -> DatabaseHealthResponse:
    db_ok, validation = await check_database()
    return DatabaseHealthResponse(
        status="UP" if db_ok else "DOWN",
        details={
            "database": engine.dialect.name,
            "validation": validation,
            "timestamp": _now(),
        },
        metrics=await database_metrics(),
    )
