"""Structured JSON log formatters and a small FastAPI service that emits them."""

__version__ = "0.1.0"
