# tests/errors/test_base.py
"""Tests for app/errors/base.py module."""

from unittest.mock import MagicMock

import orjson
import pytest
from fastapi.responses import ORJSONResponse

from app.errors import BaseAppError, TripNotFoundError, create_exception_handler


def mock_request(client_host: str | None, path: str) -> MagicMock:
    request = MagicMock()
    if client_host is None:
        request.client = None
    else:
        request.client.host = client_host
    request.url.path = path
    return request


class TestBaseAppError:
    """Tests for BaseAppError exception."""

    def test_default_values(self) -> None:
        """Test default initialization values."""
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500

    def test_custom_values(self) -> None:
        error = BaseAppError(detail="Custom error", status_code=400)
        assert error.detail == "Custom error"
        assert error.status_code == 400

    def test_str_representation(self) -> None:
        assert str(BaseAppError(detail="Test error")) == "Test error"


class TestCreateExceptionHandler:
    """Tests for create_exception_handler factory function."""

    @pytest.mark.asyncio
    async def test_handler_with_base_app_error(self) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(
            mock_request("192.168.1.1", "/trips/plan"),
            BaseAppError(detail="Test error", status_code=400),
        )

        assert isinstance(response, ORJSONResponse)
        assert response.status_code == 400
        assert response.body == b'{"detail":"Test error"}'
        logger.warning.assert_called_once_with(
            "Test error for ip: 192.168.1.1 for endpoint /trips/plan",
        )

    @pytest.mark.asyncio
    async def test_handler_with_generic_exception(self) -> None:
        """Test handler with generic Python exception."""
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(mock_request("127.0.0.1", "/api/error"), ValueError("boom"))

        assert response.status_code == 500
        assert response.body == b'{"detail":"Internal Server Error"}'

    @pytest.mark.asyncio
    async def test_handler_with_no_client(self) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        _ = await handler(mock_request(None, "/trips"), BaseAppError(detail="Error"))

        logger.warning.assert_called_once_with("Error for ip: unknown for endpoint /trips")

    @pytest.mark.asyncio
    async def test_extra_attributes_are_included(self) -> None:
        """Public attributes of the exception are added to the response body."""
        handler = create_exception_handler(MagicMock())

        response = await handler(
            mock_request("10.0.0.1", "/trips/shared"),
            TripNotFoundError(trip_id="trip-1"),
        )

        assert response.status_code == 404
        assert orjson.loads(response.body) == {
            "detail": "Trip not found or link is invalid.",
            "trip_id": "trip-1",
        }
