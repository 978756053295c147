"""Logging configuration: JSON lines for production, human-readable for development.

Configure once at application startup. Module loggers come from structlog and
are routed through the stdlib root handler, so keyword arguments become log
event properties:
    logger.info("Retrieved {ProductCount} products", ProductCount=3)

Plain stdlib loggers work too; their ``extra`` dict becomes the properties.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
import logging
import sys
from typing import Any

import structlog

from logs_formatter.formatting import (
    ControlledFieldsJsonFormatter,
    JsonLineFormatter,
    JsonLineOptions,
    MappedFieldsJsonFormatter,
    SnakeCaseJsonFormatter,
    StructuredFormatter,
    TraceContextEnricher,
    event_from_record,
    simplify,
)
from logs_formatter.formatting.enrichers import LogEventEnricher
from logs_formatter.formatting.formatters import describe_exception, display_value
from logs_formatter.formatting.records import SOURCE_CONTEXT_PROPERTY

# Third-party loggers: always WARNING so they don't flood output regardless of app level.
THIRD_PARTY_LOGGER_LEVELS: dict[str, str] = {
    "uvicorn": "WARNING",
    "uvicorn.error": "WARNING",
    "uvicorn.access": "WARNING",
    "watchfiles": "WARNING",
}

DEFAULT_ALLOWED_FIELDS: tuple[str, ...] = ("RequestId", "TraceId", "SpanId")
DEFAULT_FIELD_MAPPINGS: dict[str, str] = {
    "RequestId": "request_id",
    "TraceId": "trace_id",
    "SpanId": "span_id",
}


class DevFormatter(logging.Formatter):
    """Human-readable formatter for local development.

    Output example:
        2025-01-15 10:23:45 | Information | app.products | Retrieved 3 products  ProductCount=3
    """

    def format(self, record: logging.LogRecord) -> str:
        event = event_from_record(record)
        ts = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        level = event.level.name.ljust(11)
        message = event.render_message()

        extras = {
            name: display_value(simplify(value))
            for name, value in event.properties.items()
            if name != SOURCE_CONTEXT_PROPERTY
        }
        extras_str = "  " + " ".join(f"{k}={v}" for k, v in extras.items()) if extras else ""

        line = f"{ts} | {level} | {record.name} | {message}{extras_str}"

        if event.exception is not None:
            exc_text = describe_exception(event.exception)
            indented = "\n".join(f"  {line_text}" for line_text in exc_text.splitlines())
            line = f"{line}\n{indented}"

        return line


def build_event_formatter(
    log_format: str,
    *,
    allowed_fields: Iterable[str] | None = None,
    field_mappings: Mapping[str, str] | None = None,
    guard_errors: bool = True,
) -> JsonLineFormatter:
    """Create the JSON line formatter for a log format name.

    Raises:
        ValueError: If ``log_format`` is not a JSON format.
    """
    if log_format == "controlled":
        return ControlledFieldsJsonFormatter(
            DEFAULT_ALLOWED_FIELDS if allowed_fields is None else allowed_fields,
            JsonLineOptions(guard_errors=guard_errors),
        )
    if log_format == "mapped":
        return MappedFieldsJsonFormatter(
            DEFAULT_FIELD_MAPPINGS if field_mappings is None else field_mappings,
            JsonLineOptions(guard_errors=guard_errors),
        )
    if log_format == "snake_case":
        return SnakeCaseJsonFormatter(JsonLineOptions(guard_errors=guard_errors))
    raise ValueError(f"Unknown JSON log format: {log_format!r}")


def configure_structlog() -> None:
    """Route structlog loggers through stdlib logging, keyword args as extras."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(
    level: str | int = "INFO",
    *,
    log_format: str = "controlled",
    stream: Any = None,
    allowed_fields: Iterable[str] | None = None,
    field_mappings: Mapping[str, str] | None = None,
    guard_errors: bool = True,
    enrichers: Iterable[LogEventEnricher] | None = None,
    logger_levels: dict[str, str | int] | None = None,
) -> None:
    """Configure root logger and structlog. Call once at application startup.

    Args:
        level: Root logger level (e.g. "INFO", logging.INFO).
        log_format: "controlled", "mapped" or "snake_case" for JSON lines,
            "dev" for human-readable output.
        stream: Output stream; defaults to sys.stdout.
        allowed_fields: Structured fields kept by the "controlled" format.
        field_mappings: Property renames used by the "mapped" format.
        guard_errors: Emit an error line instead of raising on serialization failures.
        enrichers: Event enrichers; defaults to the trace context enricher.
        logger_levels: Optional mapping of logger names to levels.
    """
    if stream is None:
        stream = sys.stdout
    root = logging.getLogger()
    root.setLevel(level if isinstance(level, int) else getattr(logging, level.upper()))
    root.handlers.clear()

    handler = logging.StreamHandler(stream)
    if log_format == "dev":
        formatter: logging.Formatter = DevFormatter()
    else:
        formatter = StructuredFormatter(
            build_event_formatter(
                log_format,
                allowed_fields=allowed_fields,
                field_mappings=field_mappings,
                guard_errors=guard_errors,
            ),
            enrichers=(TraceContextEnricher(),) if enrichers is None else enrichers,
        )
    handler.setFormatter(formatter)
    handler.setLevel(root.level)
    root.addHandler(handler)

    levels = {**THIRD_PARTY_LOGGER_LEVELS, **(logger_levels or {})}
    for name, lvl in levels.items():
        log = logging.getLogger(name)
        log.setLevel(lvl if isinstance(lvl, int) else getattr(logging, lvl.upper()))

    configure_structlog()


__all__ = [
    "DEFAULT_ALLOWED_FIELDS",
    "DEFAULT_FIELD_MAPPINGS",
    "THIRD_PARTY_LOGGER_LEVELS",
    "DevFormatter",
    "build_event_formatter",
    "configure_logging",
    "configure_structlog",
]
