"""Structured log event model and JSON line formatters."""

from logs_formatter.formatting.capture import capture_property_value
from logs_formatter.formatting.enrichers import TraceContextEnricher
from logs_formatter.formatting.events import (
    DictionaryValue,
    LogEvent,
    LogEventLevel,
    LogEventProperty,
    LogEventPropertyValue,
    ScalarValue,
    SequenceValue,
    StructureValue,
)
from logs_formatter.formatting.formatters import (
    ControlledFieldsJsonFormatter,
    JsonLineFormatter,
    JsonLineOptions,
    LogFormattingError,
    LogSerializationError,
    MappedFieldsJsonFormatter,
    SnakeCaseJsonFormatter,
)
from logs_formatter.formatting.records import StructuredFormatter, event_from_record
from logs_formatter.formatting.simplify import simplify, to_snake_case

__all__ = [
    "ControlledFieldsJsonFormatter",
    "DictionaryValue",
    "JsonLineFormatter",
    "JsonLineOptions",
    "LogEvent",
    "LogEventLevel",
    "LogEventProperty",
    "LogEventPropertyValue",
    "LogFormattingError",
    "LogSerializationError",
    "MappedFieldsJsonFormatter",
    "ScalarValue",
    "SequenceValue",
    "SnakeCaseJsonFormatter",
    "StructureValue",
    "StructuredFormatter",
    "TraceContextEnricher",
    "capture_property_value",
    "event_from_record",
    "simplify",
    "to_snake_case",
]
