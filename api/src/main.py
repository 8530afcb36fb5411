"""
FastAPI application entry point for the Dog Walking Booking API.

This module provides the main FastAPI application with:
- Owner, dog and booking endpoints
- Request logging with correlation IDs
- Mapping of domain errors to HTTP responses
- MongoDB client management
- Graceful startup and shutdown
"""

import time
import uuid
import structlog
import uvicorn
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.src.config import get_settings, Settings
from api.src.dependencies import close_database, init_database
from api.src.errors import ConversionError, StoreError
from api.src.routers import bookings_router, dogs_router, owners_router
from shared.logging import bind_context, clear_context, configure_logging

# Initialize logger
logger = structlog.get_logger(__name__)

# Get settings
settings: Settings = get_settings()

configure_logging(
    log_level=settings.log_level,
    json_logs=settings.log_format == "json",
    service_name=settings.app_name,
    environment=settings.environment,
)

# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    A MongoDB server that cannot be reached at startup aborts the
    application; once running, request failures never do.
    """
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    try:
        await init_database(settings)
    except Exception as e:
        logger.error("application_startup_failed", error=str(e), exc_info=True)
        raise

    logger.info("application_started", host=settings.host, port=settings.port)

    try:
        yield
    finally:
        logger.info("application_shutting_down")
        await close_database()
        logger.info("application_shutdown_complete")

# ============================================================================
# FastAPI Application
# ============================================================================

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Owners, dogs and walk bookings backed by MongoDB.",
    lifespan=lifespan,
    debug=settings.debug,
)

# ============================================================================
# Middleware Configuration
# ============================================================================

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging with correlation IDs."""

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())

        clear_context()
        bind_context(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path
        )

        start_time = time.time()
        logger.info("request_started")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error("request_failed", error=str(e), duration=f"{duration:.3f}s", exc_info=True)
            raise

        duration = time.time() - start_time
        logger.info("request_completed", status_code=response.status_code, duration=f"{duration:.3f}s")

        response.headers["X-Correlation-ID"] = correlation_id
        return response

app.add_middleware(RequestLoggingMiddleware)

# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(ConversionError)
async def conversion_error_handler(request: Request, exc: ConversionError) -> JSONResponse:
    """Malformed identifiers and timestamps are client errors."""
    logger.warning("request_conversion_failed", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "error_type": type(exc).__name__}
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Persistence failures are reported, never fatal."""
    logger.error("request_store_failed", error=str(exc), operation=exc.operation)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "error_type": "StoreError"}
    )

# ============================================================================
# Routes
# ============================================================================

@app.get("/", response_class=PlainTextResponse, tags=["Health"])
async def hello() -> str:
    """Liveness greeting."""
    return "Hello, World!"


app.include_router(owners_router)
app.include_router(dogs_router)
app.include_router(bookings_router)

# ============================================================================
# Application Entry Point
# ============================================================================

def run() -> None:
    """Run the application with Uvicorn."""
    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run()
