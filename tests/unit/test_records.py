"""Tests for the logging record bridge and trace context enrichment."""

from collections.abc import Callable
import json
import logging
import sys

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import format_span_id, format_trace_id
import pytest

from logs_formatter.formatting import (
    ControlledFieldsJsonFormatter,
    LogEvent,
    LogEventLevel,
    ScalarValue,
    SnakeCaseJsonFormatter,
    StructuredFormatter,
    TraceContextEnricher,
    event_from_record,
)


def _record(msg: str = "Test message", level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestEventFromRecord:
    """Tests for event_from_record()."""

    @pytest.mark.parametrize(
        ("levelno", "expected"),
        [
            (5, LogEventLevel.Verbose),
            (logging.DEBUG, LogEventLevel.Debug),
            (logging.INFO, LogEventLevel.Information),
            (logging.WARNING, LogEventLevel.Warning),
            (logging.ERROR, LogEventLevel.Error),
            (logging.CRITICAL, LogEventLevel.Fatal),
        ],
    )
    def test_level_mapping(self, levelno: int, expected: LogEventLevel) -> None:
        assert event_from_record(_record(level=levelno)).level is expected

    def test_extras_become_properties_after_source_context(self) -> None:
        record = _record(RequestId="abc-123", ProductCount=3, Skipped=None)

        event = event_from_record(record)

        assert list(event.properties) == ["SourceContext", "RequestId", "ProductCount"]
        assert event.properties["SourceContext"] == ScalarValue("test.logger")
        assert event.properties["ProductCount"] == ScalarValue(3)

    def test_color_message_is_excluded(self) -> None:
        record = _record(color_message="\x1b[1mcolored\x1b[0m")
        assert "color_message" not in event_from_record(record).properties

    def test_percent_arguments_are_applied(self) -> None:
        record = logging.LogRecord("x", logging.INFO, "", 0, "Running on %s:%d", ("host", 80), None)
        assert event_from_record(record).render_message() == "Running on host:80"

    def test_timestamp_comes_from_record(self) -> None:
        record = _record()
        assert event_from_record(record).timestamp.timestamp() == pytest.approx(record.created)

    def test_exception_is_attached(self) -> None:
        try:
            raise ValueError("test error")
        except ValueError:
            record = logging.LogRecord(
                "test.logger", logging.ERROR, "", 0, "Failed", (), sys.exc_info()
            )

        event = event_from_record(record)

        assert isinstance(event.exception, ValueError)
        assert str(event.exception) == "test error"


class TestStructuredFormatter:
    """Tests for the logging.Formatter adapter."""

    def test_formats_record_as_json_line(self) -> None:
        formatter = StructuredFormatter(ControlledFieldsJsonFormatter(["RequestId"]))
        record = _record("Retrieved {ProductCount} products", RequestId="r-1", ProductCount=3)

        output = formatter.format(record)

        assert "\n" not in output
        parsed = json.loads(output)
        assert parsed["fields"] == {"RequestId": "r-1"}
        assert parsed["message"] == (
            "Retrieved 3 products | ExtraFields: SourceContext=test.logger, ProductCount=3"
        )

    def test_exception_traceback_is_included(self) -> None:
        formatter = StructuredFormatter(SnakeCaseJsonFormatter())
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, "", 0, "Failed", (), sys.exc_info())

        parsed = json.loads(formatter.format(record))

        assert "Traceback" in parsed["exception"]
        assert "RuntimeError: boom" in parsed["exception"]

    def test_enrichers_run_in_order(self) -> None:
        class _AddProperty:
            def __init__(self, name: str, value: str) -> None:
                self.name = name
                self.value = value

            def enrich(self, event: LogEvent) -> LogEvent:
                return event.with_properties_if_absent({self.name: ScalarValue(self.value)})

        formatter = StructuredFormatter(
            SnakeCaseJsonFormatter(),
            enrichers=[_AddProperty("First", "1"), _AddProperty("First", "2"), _AddProperty("Second", "3")],
        )

        parsed = json.loads(formatter.format(_record()))

        assert parsed["fields"]["first"] == "1"
        assert parsed["fields"]["second"] == "3"


class TestTraceContextEnricher:
    """Tests for TraceContextEnricher."""

    @pytest.fixture
    def tracer_provider(self) -> TracerProvider:
        return TracerProvider()

    def test_no_active_span_leaves_event_unchanged(
        self, make_event: Callable[..., LogEvent]
    ) -> None:
        event = make_event({"RequestId": "1"})
        assert TraceContextEnricher().enrich(event) is event

    def test_adds_trace_and_span_ids(
        self, tracer_provider: TracerProvider, make_event: Callable[..., LogEvent]
    ) -> None:
        tracer = tracer_provider.get_tracer(__name__)
        with tracer.start_as_current_span("request") as span:
            enriched = TraceContextEnricher().enrich(make_event())
            context = span.get_span_context()

        assert enriched.properties["TraceId"] == ScalarValue(format_trace_id(context.trace_id))
        assert enriched.properties["SpanId"] == ScalarValue(format_span_id(context.span_id))
        assert len(enriched.properties["TraceId"].value) == 32
        assert len(enriched.properties["SpanId"].value) == 16

    def test_existing_trace_id_is_kept(
        self, tracer_provider: TracerProvider, make_event: Callable[..., LogEvent]
    ) -> None:
        tracer = tracer_provider.get_tracer(__name__)
        with tracer.start_as_current_span("request"):
            enriched = TraceContextEnricher().enrich(make_event({"TraceId": "upstream"}))

        assert enriched.properties["TraceId"] == ScalarValue("upstream")
        assert "SpanId" in enriched.properties
