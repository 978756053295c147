"""Capture arbitrary Python objects as log event property values."""

from collections.abc import Mapping
import dataclasses
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from logs_formatter.formatting.events import (
    DictionaryValue,
    LogEventProperty,
    LogEventPropertyValue,
    ScalarValue,
    SequenceValue,
    StructureValue,
)

DEFAULT_MAX_DEPTH = 10

_SCALAR_TYPES = (
    str,
    bytes,
    int,
    float,
    bool,
    Decimal,
    UUID,
    Enum,
    datetime,
    date,
    time,
    timedelta,
)


def capture_property_value(
    value: Any, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> LogEventPropertyValue:
    """Convert a Python object into a property value tree.

    Args:
        value: Object to capture. Property values are returned unchanged.
        max_depth: Nesting limit. Anything nested deeper is captured as a null
            scalar, which also stops self-referencing containers.

    Returns:
        Mappings become dictionary values, dataclasses and pydantic models
        become structures tagged with their class name, other iterables
        become sequences. Everything else is kept as a scalar.
    """
    return _capture(value, max_depth)


def _capture(value: Any, depth: int) -> LogEventPropertyValue:
    if isinstance(value, LogEventPropertyValue):
        return value
    if value is None or isinstance(value, _SCALAR_TYPES):
        return ScalarValue(value)
    if depth <= 0:
        return ScalarValue(None)
    if isinstance(value, Mapping):
        return DictionaryValue(
            tuple((_capture_key(key), _capture(item, depth - 1)) for key, item in value.items())
        )
    if isinstance(value, BaseModel):
        return StructureValue(
            tuple(
                LogEventProperty(name, _capture(getattr(value, name), depth - 1))
                for name in type(value).model_fields
            ),
            type_tag=type(value).__name__,
        )
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return StructureValue(
            tuple(
                LogEventProperty(f.name, _capture(getattr(value, f.name), depth - 1))
                for f in dataclasses.fields(value)
            ),
            type_tag=type(value).__name__,
        )
    if isinstance(value, (list, tuple, set, frozenset)):
        return SequenceValue(tuple(_capture(element, depth - 1) for element in value))
    return ScalarValue(value)


def _capture_key(key: Any) -> ScalarValue:
    if isinstance(key, ScalarValue):
        return key
    return ScalarValue(key)


__all__ = ["DEFAULT_MAX_DEPTH", "capture_property_value"]
