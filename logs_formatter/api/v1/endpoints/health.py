"""Health check endpoint."""

from fastapi import APIRouter, Depends

from logs_formatter.core.config import Settings, get_settings
from logs_formatter.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic liveness check - returns healthy if the service is running",
)
async def health_check(
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Basic health check endpoint for liveness probes."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        log_format=settings.log_format,
        tracing=settings.otel_enabled,
    )
