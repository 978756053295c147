"""Tracing setup: OpenTelemetry tracer provider, OTLP export and FastAPI instrumentation.

Log lines pick up the active span through the trace context enricher, so
every request log carries ``TraceId`` and ``SpanId`` once tracing is on.
"""

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
import structlog

from logs_formatter.core.config import Settings

logger = structlog.get_logger(__name__)


def build_tracer_provider(settings: Settings) -> TracerProvider:
    """Create a tracer provider, exporting over OTLP when an endpoint is configured."""
    resource = Resource.create(
        {
            "service.name": settings.otel_service_name,
            "service.version": settings.app_version,
            "deployment.environment": settings.environment,
        }
    )
    provider = TracerProvider(resource=resource)
    if settings.otel_exporter_otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def configure_tracing(settings: Settings, app: FastAPI) -> TracerProvider | None:
    """Install the global tracer provider and instrument ``app``.

    Returns:
        The installed provider, or None when tracing is disabled.
    """
    if not settings.otel_enabled:
        return None
    provider = build_tracer_provider(settings)
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
    logger.info(
        "Tracing enabled for {ServiceName}",
        ServiceName=settings.otel_service_name,
        OtlpEndpoint=settings.otel_exporter_otlp_endpoint,
    )
    return provider


__all__ = ["build_tracer_provider", "configure_tracing"]
