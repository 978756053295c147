"""Health check response schema."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    model_config = ConfigDict(title="Health status (version, environment, log format)")

    status: Literal["healthy", "degraded", "unhealthy"] = Field(
        ...,
        description="Overall health status of the service",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(
        ...,
        description="Current environment (development, staging, production)",
    )
    log_format: str = Field(..., description="Active console log format")
    tracing: bool = Field(default=False, description="Whether OpenTelemetry tracing is enabled")
