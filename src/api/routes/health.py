"""Health check endpoints."""

from datetime import datetime

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

logger = structlog.get_logger()

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Service status, optionally with the document store's status."""

    service: str
    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None


def _report(status: str, database: str | None = None) -> HealthResponse:
    return HealthResponse(
        service=settings.app_name,
        status=status,
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=database,
    )


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health_check() -> HealthResponse:
    """Report that the process is up. Never touches the database."""
    return _report("healthy")


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Readiness check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Report whether users, profiles and posts can be reached."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("database_unreachable", error_type=type(e).__name__)
        return _report("degraded", database=f"unhealthy: {type(e).__name__}")
    return _report("healthy", database="healthy")
