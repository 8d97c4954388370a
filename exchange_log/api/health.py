"""Health check endpoints."""

from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from exchange_log.config import Settings
from exchange_log.dependencies import get_app_settings
from exchange_log.schemas.response import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Lightweight health check for uptime monitoring",
)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic uptime check.
    No external dependencies are verified.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        environment=settings.app_env,
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Indicates whether the process is alive",
)
async def liveness_check() -> dict:
    """
    Kubernetes liveness probe.
    Should NEVER check dependencies.
    """
    return {"live": True}
