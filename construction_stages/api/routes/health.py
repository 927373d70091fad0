import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from construction_stages.db import ping_database

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint for load balancer.

    Returns 503 during graceful shutdown so traffic drains.
    """
    if getattr(request.app.state, "shutting_down", False):
        return JSONResponse(
            status_code=503,
            content={"status": "shutting_down", "service": "construction-stages"},
        )
    return {"status": "healthy", "service": "construction-stages"}


@router.get("/ready")
async def readiness_check():
    """Readiness check - verifies the database is reachable."""
    checks = {"database": False}

    try:
        await ping_database()
        checks["database"] = True
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e), error_type=type(e).__name__)

    all_healthy = all(checks.values())
    status_code = 200 if all_healthy else 503

    return JSONResponse(
        status_code=status_code,
        content={"status": "ready" if all_healthy else "degraded", "checks": checks},
    )
