"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src import database

router = APIRouter()


@router.get("/health")
async def health():
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness():
    """Readiness check for load balancers."""
    checks = {
        "database": await database.check_db_connection(),
    }
    all_healthy = all(checks.values())

    return JSONResponse(
        content={
            "status": "ready" if all_healthy else "not_ready",
            "checks": checks,
        },
        status_code=200 if all_healthy else 503,
    )


@router.get("/health/live")
async def liveness():
    """Liveness check for container orchestration."""
    return {"status": "alive"}
