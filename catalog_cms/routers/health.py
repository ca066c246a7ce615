"""Health check endpoints for load balancers and monitoring."""

from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker

from catalog_cms.config import settings
from catalog_cms.database import get_session_factory

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Lightweight liveness check (no DB)."""
    return {
        "status": "ok",
        "service": "catalog-cms",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": settings.environment,
    }


@router.get("/health/ready")
async def readiness_check(
    session_factory: async_sessionmaker = Depends(get_session_factory),
):
    """Readiness check; 503 unless the database answers."""
    checks = {"service": "ok", "database": "unknown"}
    healthy = True

    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {str(e)[:100]}"
        healthy = False

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": "catalog-cms",
            "checks": checks,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )
