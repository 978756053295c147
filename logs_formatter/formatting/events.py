"""Structured log event model: levels, property values and the event record.

A log event carries a message template plus named, typed property values.
Property values form a closed set of variants that formatters walk:

    ScalarValue     a primitive (str, int, float, bool, None, datetime, ...)
    SequenceValue   an ordered list of property values
    StructureValue  an object: ordered (name, property value) pairs
    DictionaryValue a map: (scalar key, property value) pairs
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import IntEnum
import re
from types import MappingProxyType
from typing import Any


class LogEventLevel(IntEnum):
    """Event severity, ordered from least to most severe."""

    Verbose = 0
    Debug = 1
    Information = 2
    Warning = 3
    Error = 4
    Fatal = 5


class LogEventPropertyValue:
    """Base class for property values attached to a log event."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class ScalarValue(LogEventPropertyValue):
    value: Any = None

    def __str__(self) -> str:
        return "" if self.value is None else str(self.value)


@dataclass(frozen=True, slots=True)
class SequenceValue(LogEventPropertyValue):
    elements: tuple[LogEventPropertyValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))


@dataclass(frozen=True, slots=True)
class LogEventProperty:
    """A named property value, used for events and structure members."""

    name: str
    value: LogEventPropertyValue


@dataclass(frozen=True, slots=True)
class StructureValue(LogEventPropertyValue):
    properties: tuple[LogEventProperty, ...] = ()
    type_tag: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", tuple(self.properties))


@dataclass(frozen=True, slots=True)
class DictionaryValue(LogEventPropertyValue):
    elements: tuple[tuple[ScalarValue, LogEventPropertyValue], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(tuple(pair) for pair in self.elements))


# {Name}, {@Name}, {$Name}, {Name:format}
_TEMPLATE_TOKEN = re.compile(r"\{([@$]?)([A-Za-z_][A-Za-z0-9_]*)(?::[^{}]*)?\}")


def _freeze_properties(
    properties: Mapping[str, LogEventPropertyValue] | Iterable[LogEventProperty],
) -> Mapping[str, LogEventPropertyValue]:
    if isinstance(properties, Mapping):
        items = dict(properties)
    else:
        items = {prop.name: prop.value for prop in properties}
    return MappingProxyType(items)


@dataclass(frozen=True)
class LogEvent:
    """One captured logging call.

    Attributes:
        timestamp: When the event occurred. Naive datetimes are read as UTC.
        level: Event severity.
        message_template: Message text, optionally with ``{Name}`` tokens that
            refer to entries in ``properties``.
        properties: Ordered, read-only mapping of property name to value.
        exception: Exception attached to the event, if any.
    """

    timestamp: datetime
    level: LogEventLevel
    message_template: str
    properties: Mapping[str, LogEventPropertyValue] = field(default_factory=dict)
    exception: BaseException | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", _freeze_properties(self.properties))

    @property
    def utc_timestamp(self) -> datetime:
        return as_utc(self.timestamp)

    def render_message(self) -> str:
        """Render the message template, substituting known property tokens."""

        def _substitute(match: re.Match[str]) -> str:
            value = self.properties.get(match.group(2))
            if value is None:
                return match.group(0)
            return render_property_value(value)

        return _TEMPLATE_TOKEN.sub(_substitute, self.message_template)

    def with_properties_if_absent(
        self, properties: Mapping[str, LogEventPropertyValue]
    ) -> "LogEvent":
        """Return a copy with ``properties`` added where the name is not yet used."""
        missing = {name: value for name, value in properties.items() if name not in self.properties}
        if not missing:
            return self
        return replace(self, properties={**self.properties, **missing})


def as_utc(timestamp: datetime) -> datetime:
    """Convert to UTC, reading naive datetimes as already UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def render_property_value(value: LogEventPropertyValue) -> str:
    """Render a property value as display text for message templates."""
    if isinstance(value, ScalarValue):
        return str(value)
    if isinstance(value, SequenceValue):
        return "[" + ", ".join(render_property_value(e) for e in value.elements) + "]"
    if isinstance(value, StructureValue):
        members = ", ".join(f"{p.name}: {render_property_value(p.value)}" for p in value.properties)
        prefix = f"{value.type_tag} " if value.type_tag else ""
        return f"{prefix}{{{members}}}"
    if isinstance(value, DictionaryValue):
        pairs = ", ".join(
            f"[{render_property_value(k)}] = {render_property_value(v)}" for k, v in value.elements
        )
        return f"{{{pairs}}}"
    return str(value)


__all__ = [
    "DictionaryValue",
    "LogEvent",
    "LogEventLevel",
    "LogEventProperty",
    "LogEventPropertyValue",
    "ScalarValue",
    "SequenceValue",
    "StructureValue",
    "as_utc",
    "render_property_value",
]
