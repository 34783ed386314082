"""
System Endpoints.

Health checks and the cron hook.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
- /cron: Acknowledges scheduler pings; no work is done
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from notebook.core.config import get_app_config
from notebook.core.dependencies import DbSession
from notebook.core.logging import get_logger
from notebook.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database(session: AsyncSession) -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    try:
        start = utc_now()
        await session.execute(text("SELECT 1"))
        latency_ms = int((utc_now() - start).total_seconds() * 1000)
        return {"status": "healthy", "latency_ms": latency_ms}
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(db: DbSession) -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 if the database cannot be reached in time.
    """
    timeout = get_app_config().application.timeouts.health_ready

    try:
        db_result = await asyncio.wait_for(check_database(db), timeout=timeout)
    except asyncio.TimeoutError:
        db_result = {"status": "unhealthy", "error": f"timed out after {timeout}s"}

    checks = {"database": db_result}

    if db_result["status"] == "unhealthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }


@router.get("/cron", response_class=PlainTextResponse)
async def cron() -> str:
    """Acknowledge a scheduler ping."""
    logger.info("Cron ping received")
    return "okay"
