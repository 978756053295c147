"""API schemas."""

from logs_formatter.schemas.common import ErrorResponse
from logs_formatter.schemas.health import HealthResponse
from logs_formatter.schemas.products import Product

__all__ = ["ErrorResponse", "HealthResponse", "Product"]
