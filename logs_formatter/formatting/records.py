"""Bridge from stdlib ``logging`` records to structured log events."""

from collections.abc import Iterable
from datetime import datetime, timezone
import logging
from typing import Any

from logs_formatter.formatting.capture import DEFAULT_MAX_DEPTH, capture_property_value
from logs_formatter.formatting.enrichers import LogEventEnricher
from logs_formatter.formatting.events import (
    LogEvent,
    LogEventLevel,
    LogEventPropertyValue,
    ScalarValue,
)
from logs_formatter.formatting.formatters import JsonLineFormatter

SOURCE_CONTEXT_PROPERTY = "SourceContext"

# Standard LogRecord attribute names; anything else on a record came from `extra`.
_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "message",
        "thread",
        "threadName",
        "taskName",
        "getMessage",
    }
)

# Display-only attributes added by third parties (e.g. uvicorn's ANSI colored message).
_EXCLUDE_EXTRAS = frozenset({"color_message"})


def level_from_record(levelno: int) -> LogEventLevel:
    if levelno >= logging.CRITICAL:
        return LogEventLevel.Fatal
    if levelno >= logging.ERROR:
        return LogEventLevel.Error
    if levelno >= logging.WARNING:
        return LogEventLevel.Warning
    if levelno >= logging.INFO:
        return LogEventLevel.Information
    if levelno >= logging.DEBUG:
        return LogEventLevel.Debug
    return LogEventLevel.Verbose


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Extract user-supplied extra fields from a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and key not in _EXCLUDE_EXTRAS and value is not None
    }


def event_from_record(
    record: logging.LogRecord, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> LogEvent:
    """Build a log event from a stdlib record.

    The record's extras become event properties, after a ``SourceContext``
    property holding the logger name. ``%``-style arguments are applied
    first, so the resulting text may still carry ``{Name}`` template tokens.
    """
    properties: dict[str, LogEventPropertyValue] = {
        SOURCE_CONTEXT_PROPERTY: ScalarValue(record.name)
    }
    for key, value in extra_fields(record).items():
        properties[key] = capture_property_value(value, max_depth=max_depth)

    exception = None
    if record.exc_info and record.exc_info[1] is not None:
        exception = record.exc_info[1]

    return LogEvent(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=level_from_record(record.levelno),
        message_template=record.getMessage(),
        properties=properties,
        exception=exception,
    )


class StructuredFormatter(logging.Formatter):
    """``logging.Formatter`` adapter around a JSON line formatter.

    Each record is converted to a log event, passed through the enrichers in
    order, and rendered as a single JSON line.
    """

    def __init__(
        self,
        event_formatter: JsonLineFormatter,
        enrichers: Iterable[LogEventEnricher] = (),
    ) -> None:
        super().__init__()
        self.event_formatter = event_formatter
        self.enrichers = tuple(enrichers)

    def format(self, record: logging.LogRecord) -> str:
        event = event_from_record(record)
        for enricher in self.enrichers:
            event = enricher.enrich(event)
        return self.event_formatter.render(event)


__all__ = [
    "SOURCE_CONTEXT_PROPERTY",
    "StructuredFormatter",
    "event_from_record",
    "extra_fields",
    "level_from_record",
]
