"""
Health check endpoints.

The service holds no database or other backing store, so the health check is
a liveness check reporting status, time and version.
"""

from datetime import UTC, datetime

from fastapi import APIRouter

from app.core.config import settings
from app.schemas.health import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Health Check")
def health_check():
    """Check the health status of the application."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=settings.app_version,
    )
