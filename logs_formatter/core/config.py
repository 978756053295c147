"""Application configuration settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogFormat = Literal["controlled", "mapped", "snake_case", "dev"]


class Settings(BaseSettings):
    """Application configuration settings.

    All settings can be overridden via environment variables. List and dict
    settings are read from JSON, e.g. ``LOG_ALLOWED_FIELDS='["RequestId"]'``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Logs Formatter"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="The environment the application is running in"
    )
    debug: bool = Field(default=False, description="Whether to run the application in debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="The log level to use"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="The host to bind the server to")
    port: int = Field(default=8000, description="The port to bind the server to")

    # Log output
    log_format: LogFormat = Field(
        default="controlled",
        description="Console log line format: controlled, mapped, snake_case or dev",
    )
    log_allowed_fields: list[str] = Field(
        default_factory=lambda: ["RequestId", "TraceId", "SpanId"],
        description="Properties kept as structured fields by the controlled format",
    )
    log_field_mappings: dict[str, str] = Field(
        default_factory=lambda: {
            "RequestId": "request_id",
            "TraceId": "trace_id",
            "SpanId": "span_id",
        },
        description="Property renames applied by the mapped format",
    )
    log_guard_errors: bool = Field(
        default=True,
        description="Write an error line instead of raising when a log event fails to serialize",
    )

    # Tracing
    otel_enabled: bool = Field(default=False, description="Enable OpenTelemetry tracing")
    otel_service_name: str = "logs-formatter"
    otel_exporter_otlp_endpoint: str | None = Field(
        default=None, description="OTLP gRPC endpoint; spans are not exported when unset"
    )

    @field_validator("log_allowed_fields")
    @classmethod
    def _check_allowed_fields(cls, value: list[str]) -> list[str]:
        if any(not name.strip() for name in value):
            raise ValueError("log_allowed_fields must not contain empty names")
        return value

    @field_validator("log_field_mappings")
    @classmethod
    def _check_field_mappings(cls, value: dict[str, str]) -> dict[str, str]:
        for source, target in value.items():
            if not source.strip() or not target.strip():
                raise ValueError("log_field_mappings keys and values must be non-empty")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


__all__ = ["LogFormat", "Settings", "get_settings"]
