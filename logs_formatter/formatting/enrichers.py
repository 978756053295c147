"""Event enrichers: attach ambient context to log events before formatting."""

from typing import Protocol

from opentelemetry import trace

from logs_formatter.formatting.events import LogEvent, ScalarValue

TRACE_ID_PROPERTY = "TraceId"
SPAN_ID_PROPERTY = "SpanId"


class LogEventEnricher(Protocol):
    def enrich(self, event: LogEvent) -> LogEvent: ...


class TraceContextEnricher:
    """Add ``TraceId`` and ``SpanId`` from the current OpenTelemetry span.

    Existing properties with those names are kept. Events logged outside a
    recording span pass through unchanged.
    """

    def enrich(self, event: LogEvent) -> LogEvent:
        span_context = trace.get_current_span().get_span_context()
        if not span_context.is_valid:
            return event
        return event.with_properties_if_absent(
            {
                TRACE_ID_PROPERTY: ScalarValue(trace.format_trace_id(span_context.trace_id)),
                SPAN_ID_PROPERTY: ScalarValue(trace.format_span_id(span_context.span_id)),
            }
        )


__all__ = ["SPAN_ID_PROPERTY", "TRACE_ID_PROPERTY", "LogEventEnricher", "TraceContextEnricher"]
