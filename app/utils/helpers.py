from collections.abc import MutableMapping
from datetime import UTC, datetime
from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from time import perf_counter, time
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from pythonjsonlogger.json import JsonFormatter
from starlette.routing import BaseRoute, Match, Route

from app.configs.settings import settings


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return today's date as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(
        "%Y-%m-%d %H:%M:%S",
    )


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def iso_now() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_ms() -> int:
    """Return milliseconds since the epoch, used for time-derived identifiers."""
    return int(time() * 1000)


def time_taken(start_time: float) -> str:
    minutes, seconds = divmod(perf_counter() - start_time, 60)
    formatted_time = f"{int(minutes)}m {int(seconds)}s"

    return formatted_time


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    summary = None
    for route in routes:
        is_api_route = type(route) is APIRoute
        is_route = type(route) is Route
        if is_api_route and route.matches(scope)[0] == Match.FULL:
            summary = route.summary
            break
        if is_route and route.matches(scope)[0] == Match.FULL:
            summary = route.name
            break

    return summary


def file_logger(logger: Logger) -> Logger:
    """
    Attach the shared JSON file handler to a logger.

    Does nothing unless ``LOG_TO_FILE`` is enabled. The handler is only
    attached once per logger, so repeated calls are harmless.

    Args:
        logger: Logger to extend.

    Returns:
        The same logger, for ``logger = file_logger(getLogger(__name__))``.
    """
    if not settings.LOG_TO_FILE:
        return logger

    log_file = Path(settings.LOG_FILE)
    if any(
        isinstance(h, RotatingFileHandler) and Path(h.baseFilename) == log_file.resolve()
        for h in logger.handlers
    ):
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setLevel(INFO)
    handler.setFormatter(JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger
