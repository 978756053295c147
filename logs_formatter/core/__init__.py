"""Core application: config, logging, tracing."""

from logs_formatter.core.config import Settings, get_settings
from logs_formatter.core.logging import DevFormatter, build_event_formatter, configure_logging
from logs_formatter.core.telemetry import configure_tracing

__all__ = [
    "DevFormatter",
    "Settings",
    "build_event_formatter",
    "configure_logging",
    "configure_tracing",
    "get_settings",
]
