"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.config.settings import settings
from src.shared.adapters.redis_adapter import get_redis_adapter
from src.shared.db import check_db
from src.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )


@router.get("/ready")
async def readiness_check():
    """
    Readiness check: the database must answer, Redis is reported but optional.
    """
    database = await check_db()
    cache = get_redis_adapter().ping()
    body = {
        "status": "ready" if database else "not_ready",
        "database": database,
        "cache": cache,
    }
    return JSONResponse(status_code=200 if database else 503, content=body)


@router.get("/live")
async def liveness_check():
    """Liveness check for Kubernetes."""
    return {"status": "alive"}


@router.get("/api/health", response_model=HealthResponse)
async def api_health():
    """Health check used by the frontend; includes a timestamp."""
    return HealthResponse(
        status="ok",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )
