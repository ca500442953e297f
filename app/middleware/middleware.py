# app/middleware/middleware.py
"""
Middleware components for the trip planner application.

This module contains middleware for security headers, request logging
and CORS handling. It also contains the lifespan event handler that
builds the AI client, the planner and the trip store and releases them
at shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import basicConfig, getLogger
from pathlib import Path
from time import perf_counter

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from rich.logging import RichHandler
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.clients.ai_client import AiClient
from app.configs import settings
from app.services.planner import TripPlanner
from app.services.storage import CloudTripStore, get_trip_store
from app.utils.helpers import file_logger, get_summary, host

if log_to_file := settings.LOG_TO_FILE:
    Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)

# --- Logging Configuration ---
basicConfig(
    level=settings.LOG_LEVEL,
    format="%(message)s",
    datefmt="%X",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = getLogger("rich")
file_logger(logger)

install()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    # Startup
    logger.info(f"Starting {app.title}...")
    logger.info(f"{app.description}")

    try:
        if log_to_file:
            logger.info("Logging to file enabled.")

        ai_client = AiClient()
        app.state.ai_client = ai_client
        app.state.planner = TripPlanner(ai_client)
        logger.info(f"AI client {'initialized' if ai_client.enabled else 'disabled, using mock content'}.")

        store = get_trip_store(settings.persistence_config())
        if isinstance(store, CloudTripStore):
            await store.initialize()
        app.state.trip_store = store
        logger.info(f"Trip store: {store.name}")

        logger.info("Services initialized successfully")
        logger.info("Services:")
        logger.info("  - Backend API: http://localhost:8000")
        logger.info("  - API Documentation: http://localhost:8000/docs")
        logger.info("  - Health Check: http://localhost:8000/health")

    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    # Shutdown
    logger.info(f"Shutting down {app.title}...")

    try:
        await app.state.ai_client.close()
        await app.state.trip_store.close()
        logger.info("Services cleaned up successfully")

    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = list(settings.FRONTEND_ORIGINS)

    if settings.PUBLIC_BASE_URL not in allowed_origins:
        allowed_origins.append(settings.PUBLIC_BASE_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        response = await call_next(request)
        duration = perf_counter() - start_time

        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path} "
            f"in {duration:.2f}s",
        )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
