"""JSON line formatters for structured log events.

Every formatter runs the same pipeline and differs only in its field policy:

    simplify property values -> split by policy into fields / overflow
    -> append overflow to the message -> serialize one compact JSON line

Overflow properties are rendered as ``key=value`` pairs after the
`` | ExtraFields: `` marker. The snake_case formatter keeps every property,
so its messages are never extended.
"""

from collections.abc import Iterable, Mapping
import base64
from dataclasses import dataclass, replace
from datetime import date, datetime, time
import json
import traceback
from typing import Any, TextIO

from logs_formatter.formatting.events import LogEvent, as_utc
from logs_formatter.formatting.policies import (
    AllowListPolicy,
    FieldPolicy,
    RenameMappingPolicy,
    SnakeCasePolicy,
)
from logs_formatter.formatting.simplify import simplify

EXTRA_FIELDS_MARKER = " | ExtraFields: "
SERIALIZATION_FAILURE_PREFIX = "Failed to serialize log event: "


@dataclass(frozen=True)
class JsonLineOptions:
    """Serialization settings owned by a single formatter instance.

    Attributes:
        timestamp_key: Name of the timestamp member in the output object.
            ``None`` selects the formatter's own default.
        guard_errors: Replace a line that fails to serialize with an
            ``{"error": ...}`` line instead of raising ``LogSerializationError``.
        ensure_ascii: Escape non-ASCII characters in the JSON output.
    """

    timestamp_key: str | None = None
    guard_errors: bool = True
    ensure_ascii: bool = False


def format_timestamp(timestamp: datetime) -> str:
    """ISO-8601 UTC with microseconds and a ``Z`` suffix."""
    return as_utc(timestamp).isoformat(timespec="microseconds").replace("+00:00", "Z")


def describe_exception(exception: BaseException) -> str:
    return "".join(traceback.format_exception(exception)).rstrip("\n")


def encode_bytes(data: bytes) -> str:
    """Base64 text for binary scalars."""
    return base64.b64encode(data).decode("ascii")


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        return encode_bytes(bytes(obj))
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    return str(obj)


def display_value(value: Any) -> str:
    """Text form of a simplified value inside the overflow suffix."""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return encode_bytes(bytes(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value, default=_json_default, ensure_ascii=False)
    return str(value)


def append_extra_fields(message: str, extras: Mapping[str, Any]) -> str:
    if not extras:
        return message
    extra_text = ", ".join(f"{key}={display_value(value)}" for key, value in extras.items())
    return f"{message}{EXTRA_FIELDS_MARKER}{extra_text}"


def _describe_failure(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        return type(exc).__name__


class JsonLineFormatter:
    """Formats log events as single-line JSON objects under a field policy."""

    default_timestamp_key = "@timestamp"

    def __init__(self, policy: FieldPolicy, options: JsonLineOptions | None = None) -> None:
        options = options or JsonLineOptions()
        if options.timestamp_key is None:
            options = replace(options, timestamp_key=self.default_timestamp_key)
        self._policy = policy
        self._options = options

    @property
    def policy(self) -> FieldPolicy:
        return self._policy

    @property
    def options(self) -> JsonLineOptions:
        return self._options

    def split_fields(self, event: LogEvent) -> tuple[dict[str, Any], dict[str, Any]]:
        """Simplify each property and partition into (fields, overflow)."""
        fields: dict[str, Any] = {}
        overflow: dict[str, Any] = {}
        key_transform = self._policy.key_transform
        for name, value in event.properties.items():
            key = self._policy.select(name)
            if key is None:
                overflow[name] = simplify(value, key_transform)
            else:
                fields[key] = simplify(value, key_transform)
        return fields, overflow

    def build_record(self, event: LogEvent) -> dict[str, Any]:
        fields, overflow = self.split_fields(event)
        record: dict[str, Any] = {
            self._options.timestamp_key: format_timestamp(event.utc_timestamp),
            "level": event.level.name,
            "message": append_extra_fields(event.render_message(), overflow),
            "fields": fields,
        }
        if event.exception is not None:
            record["exception"] = describe_exception(event.exception)
        return record

    def render(self, event: LogEvent) -> str:
        """Return the JSON text for ``event`` without a line terminator."""
        try:
            return json.dumps(
                self.build_record(event),
                default=_json_default,
                ensure_ascii=self._options.ensure_ascii,
                separators=(",", ":"),
                allow_nan=False,
            )
        except Exception as exc:
            if not self._options.guard_errors:
                raise LogSerializationError(
                    f"{SERIALIZATION_FAILURE_PREFIX}{_describe_failure(exc)}"
                ) from exc
            return json.dumps({"error": f"{SERIALIZATION_FAILURE_PREFIX}{_describe_failure(exc)}"})

    def format(self, event: LogEvent) -> str:
        """Return one JSON line for ``event``, including the line terminator."""
        return self.render(event) + "\n"

    def write(self, event: LogEvent, output: TextIO) -> None:
        output.write(self.format(event))


class ControlledFieldsJsonFormatter(JsonLineFormatter):
    """Emit only allow-listed properties as fields; the rest go into the message."""

    def __init__(
        self, allowed_fields: Iterable[str], options: JsonLineOptions | None = None
    ) -> None:
        super().__init__(AllowListPolicy(allowed_fields), options)


class MappedFieldsJsonFormatter(JsonLineFormatter):
    """Emit properties found in the rename table under their mapped names."""

    def __init__(
        self, field_mappings: Mapping[str, str], options: JsonLineOptions | None = None
    ) -> None:
        super().__init__(RenameMappingPolicy(field_mappings), options)


class SnakeCaseJsonFormatter(JsonLineFormatter):
    """Emit every property with snake_case keys, including nested structure members."""

    default_timestamp_key = "timestamp"

    def __init__(self, options: JsonLineOptions | None = None) -> None:
        super().__init__(SnakeCasePolicy(), options)


class LogFormattingError(Exception):
    """Base error for log formatting failures."""


class LogSerializationError(LogFormattingError):
    """A log event could not be serialized to JSON."""


__all__ = [
    "EXTRA_FIELDS_MARKER",
    "ControlledFieldsJsonFormatter",
    "JsonLineFormatter",
    "JsonLineOptions",
    "LogFormattingError",
    "LogSerializationError",
    "MappedFieldsJsonFormatter",
    "SnakeCaseJsonFormatter",
    "append_extra_fields",
    "describe_exception",
    "display_value",
    "encode_bytes",
    "format_timestamp",
]
