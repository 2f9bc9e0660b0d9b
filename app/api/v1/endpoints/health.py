"""
Health and readiness endpoints for production monitoring
"""
import time
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from pydantic import BaseModel

from app.core.database import get_db
from app.config import settings
from app.services.websocket_manager import manager

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str
    version: str
    environment: str
    uptime: float
    websocket_connections: int
    timestamp: str


class ReadinessResponse(BaseModel):
    """Readiness check response model"""
    status: str
    version: str
    environment: str
    database: dict
    timestamp: str


# Track app start time for uptime calculation
app_start_time = time.time()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/healthz", response_model=HealthResponse)
async def health_check():
    """
    Liveness check - returns app version, uptime and open realtime sessions
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        uptime=time.time() - app_start_time,
        websocket_connections=len(manager.active_connections),
        timestamp=_now()
    )


@router.get("/readyz", response_model=ReadinessResponse)
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """
    Readiness check - pings the database and returns 200 only if it answers
    """
    try:
        start_time = time.time()
        await db.execute(text("SELECT 1"))
        db_response_time = time.time() - start_time
    except Exception as e:
        # Return 503 Service Unavailable if database is down
        raise HTTPException(
            status_code=503,
            detail={
                "status": "not_ready",
                "version": settings.app_version,
                "environment": settings.environment,
                "database": {"status": "unhealthy", "error": str(e)},
                "timestamp": _now()
            }
        )

    return ReadinessResponse(
        status="ready",
        version=settings.app_version,
        environment=settings.environment,
        database={
            "status": "healthy",
            "response_time": db_response_time
        },
        timestamp=_now()
    )
