"""ASGI entry point: ``uvicorn logs_formatter.main:app``."""

import uvicorn

from logs_formatter.core import configure_logging, get_settings
from logs_formatter.factory import create_app

_settings = get_settings()
configure_logging(
    _settings.log_level,
    log_format=_settings.log_format,
    allowed_fields=_settings.log_allowed_fields,
    field_mappings=_settings.log_field_mappings,
    guard_errors=_settings.log_guard_errors,
)

app = create_app()


def run() -> None:
    """Run the service with uvicorn using the configured host and port."""
    uvicorn.run(app, host=_settings.host, port=_settings.port, log_config=None)


if __name__ == "__main__":
    run()
