"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Callable, Generator
from datetime import datetime, timezone
from io import StringIO
from typing import Any

from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
import pytest

from logs_formatter.core import Settings, configure_logging, get_settings
from logs_formatter.formatting import LogEvent, LogEventLevel, LogEventPropertyValue, ScalarValue
from logs_formatter.main import app

FIXED_TIMESTAMP = datetime(2024, 5, 17, 9, 30, 15, 123456, tzinfo=timezone.utc)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        environment="development",
        debug=True,
        log_format="controlled",
    )


@pytest.fixture
def make_event() -> Callable[..., LogEvent]:
    """Factory for log events; plain property values are wrapped as scalars."""

    def _make(
        properties: dict[str, Any] | None = None,
        *,
        message: str = "Test message",
        level: LogEventLevel = LogEventLevel.Information,
        exception: BaseException | None = None,
        timestamp: datetime = FIXED_TIMESTAMP,
    ) -> LogEvent:
        props = {
            name: value if isinstance(value, LogEventPropertyValue) else ScalarValue(value)
            for name, value in (properties or {}).items()
        }
        return LogEvent(
            timestamp=timestamp,
            level=level,
            message_template=message,
            properties=props,
            exception=exception,
        )

    return _make


@pytest.fixture
def log_stream() -> Generator[StringIO, None, None]:
    """Capture JSON log lines written through the root logger."""
    stream = StringIO()
    configure_logging(level="INFO", stream=stream)
    yield stream
    configure_logging(level="INFO")


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the FastAPI app."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
