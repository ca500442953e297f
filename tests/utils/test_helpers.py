# tests/utils/test_helpers.py
"""Tests for app/utils/helpers.py module."""

import re
from datetime import UTC, datetime
from logging import INFO, getLogger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from time import perf_counter, sleep
from unittest.mock import MagicMock

import orjson
from fastapi import FastAPI
from pytest_mock.plugin import MockerFixture
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from app.configs import settings
from app.utils.helpers import (
    epoch_ms,
    file_logger,
    get_summary,
    host,
    iso_now,
    time_taken,
    today_str,
)


class TestTodayStr:
    """Tests for today_str function."""

    def test_returns_string(self) -> None:
        """Test that today_str returns a string."""
        result = today_str()
        assert isinstance(result, str)

    def test_format_matches_expected_pattern(self) -> None:
        """Test that the date format matches YYYY-MM-DD HH:MM:SS."""
        result = today_str()
        pattern = r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"
        assert re.match(pattern, result), f"Date format mismatch: {result}"

    def test_contains_valid_date_components(self) -> None:
        """Test that the date components are valid."""
        result = today_str()
        parts = result.split(" ")
        assert len(parts) == 2

        date_part = parts[0]
        time_part = parts[1]

        year, month, day = date_part.split("-")
        assert 2020 <= int(year) <= 2100
        assert 1 <= int(month) <= 12
        assert 1 <= int(day) <= 31

        hour, minute, second = time_part.split(":")
        assert 0 <= int(hour) <= 23
        assert 0 <= int(minute) <= 59
        assert 0 <= int(second) <= 59


class TestTimeTaken:
    """Tests for time_taken function."""

    def test_returns_formatted_string(self) -> None:
        """Test that time_taken returns a formatted string."""

        start = perf_counter()
        result = time_taken(start)
        assert isinstance(result, str)
        assert "m" in result
        assert "s" in result

    def test_format_pattern(self) -> None:
        """Test the format is Xm Ys."""

        start = perf_counter()
        result = time_taken(start)
        pattern = r"^\d+m \d+s$"
        assert re.match(pattern, result), f"Format mismatch: {result}"

    def test_elapsed_time_calculation(self) -> None:
        """Test that elapsed time is calculated correctly."""

        start = perf_counter()
        sleep(0.1)  # Sleep for 100ms
        result = time_taken(start)
        assert result == "0m 0s"

    def test_with_longer_duration(self) -> None:
        """Test with a mock start time that results in longer duration."""

        # Mock a start time that was 65 seconds ago
        start = perf_counter() - 65
        result = time_taken(start)
        assert result == "1m 5s"

    def test_with_hours_worth_of_time(self) -> None:
        """Test with duration exceeding 60 minutes."""

        # 3665 seconds = 61 minutes and 5 seconds
        start = perf_counter() - 3665
        result = time_taken(start)
        # divmod gives 61m 5s (not handling hours)
        assert result == "61m 5s"


class TestGetSummary:
    """Tests for get_summary function."""

    def test_returns_none_for_no_matching_route(self) -> None:
        """Test that None is returned when no route matches."""
        app = FastAPI()
        # test_client = TestClient(app)

        # Create a mock request for a non-existent route
        request = MagicMock()
        request.scope = {
            "type": "http",
            "method": "GET",
            "path": "/nonexistent",
            "app": app,
        }

        result = get_summary(request)
        # No routes defined, should return None
        assert result is None

    def test_returns_summary_for_api_route(self) -> None:
        """Test that summary is returned for APIRoute."""
        app = FastAPI()

        @app.get("/test", summary="Test Endpoint Summary")
        async def test_endpoint() -> dict[str, str]:
            return {"msg": "test"}

        with TestClient(app) as client:
            # Make a real request to populate scope correctly
            response = client.get("/test")
            assert response.status_code == 200

    def test_returns_name_for_starlette_route(self) -> None:
        """Test that route name is returned for Starlette Route."""

        async def homepage(request: MagicMock) -> JSONResponse:
            return JSONResponse({"hello": "world"})

        app = Starlette(routes=[Route("/", homepage, name="homepage")])

        # Verify route exists
        assert len(app.routes) > 0


class TestTimestamps:
    """Tests for iso_now and epoch_ms."""

    def test_iso_now_is_utc_with_milliseconds(self) -> None:
        result = iso_now()
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", result)
        assert datetime.fromisoformat(result).tzinfo == UTC

    def test_epoch_ms_increases(self) -> None:
        first = epoch_ms()
        sleep(0.002)
        assert epoch_ms() > first


class TestHost:
    def test_client_host(self) -> None:
        request = MagicMock()
        request.client.host = "10.0.0.1"
        assert host(request) == "10.0.0.1"

    def test_missing_client(self) -> None:
        request = MagicMock()
        request.client = None
        assert host(request) == "unknown"


class TestFileLogger:
    """Tests for file_logger function."""

    def test_disabled_by_default(self) -> None:
        logger = getLogger("tests.file_logger.disabled")
        assert file_logger(logger) is logger
        assert not any(isinstance(h, RotatingFileHandler) for h in logger.handlers)

    def test_attaches_handler_once(self, mocker: MockerFixture, tmp_path: Path) -> None:
        mocker.patch.object(settings, "LOG_TO_FILE", True)
        mocker.patch.object(settings, "LOG_FILE", str(tmp_path / "logs" / "app.log"))
        logger = getLogger("tests.file_logger.enabled")

        file_logger(logger)
        file_logger(logger)

        handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert (tmp_path / "logs").is_dir()
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()

    def test_file_records_keep_time_and_level(self, mocker: MockerFixture, tmp_path: Path) -> None:
        log_file = tmp_path / "app.log"
        mocker.patch.object(settings, "LOG_TO_FILE", True)
        mocker.patch.object(settings, "LOG_FILE", str(log_file))
        logger = getLogger("tests.file_logger.format")
        logger.setLevel(INFO)

        file_logger(logger)
        logger.warning("Quota exceeded while generating budget")

        handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        for handler in handlers:
            handler.flush()
        record = orjson.loads(log_file.read_text().splitlines()[0])
        assert record["message"] == "Quota exceeded while generating budget"
        assert record["levelname"] == "WARNING"
        assert record["name"] == "tests.file_logger.format"
        assert record["asctime"]
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()
