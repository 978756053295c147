"""Application factory: builds the FastAPI app with middleware, handlers, and routes."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from logs_formatter.api.v1 import router as v1_router
from logs_formatter.core import configure_tracing, get_settings
from logs_formatter.schemas import ErrorResponse

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:  # noqa: ARG001
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "Starting {AppName} {Version}",
        AppName=settings.app_name,
        Version=settings.app_version,
        Environment=settings.environment,
        LogFormat=settings.log_format,
    )
    yield
    logger.info("Shutting down application")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Product catalog service writing structured JSON log lines to the console.",
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER, str(uuid.uuid4()))
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(RequestId=request_id)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed = (time.perf_counter() - start_time) * 1000
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Process-Time-Ms"] = f"{elapsed:.2f}"
            logger.info(
                "HTTP {RequestMethod} {RequestPath} responded {StatusCode} in {Elapsed} ms",
                RequestMethod=request.method,
                RequestPath=request.url.path,
                StatusCode=response.status_code,
                Elapsed=round(elapsed, 4),
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        request_id = getattr(request.state, "request_id", None)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                error="validation_error",
                message="Request validation failed",
                request_id=request_id,
                details={"errors": exc.errors()},
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = getattr(request.state, "request_id", None)
        logger.error(
            "Unhandled exception on {RequestPath}",
            RequestPath=request.url.path,
            RequestId=request_id,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="internal_error",
                message="An unexpected error occurred",
                request_id=request_id,
            ).model_dump(),
        )

    app.include_router(v1_router)
    configure_tracing(settings, app)

    return app
