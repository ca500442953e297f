from collections.abc import Awaitable, Callable
from logging import getLogger

from fastapi.responses import ORJSONResponse
from starlette.requests import Request
from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from app.configs.settings import TRIP_NOT_FOUND_ERROR
from app.errors.base import BaseAppError, create_exception_handler
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


class PersistenceError(BaseAppError):
    """Base exception for trip store errors."""

    def __init__(
        self,
        detail: str = "Trip store error",
        status_code: int = HTTP_503_SERVICE_UNAVAILABLE,
    ) -> None:
        super().__init__(detail, status_code)


class PersistenceConfigurationError(PersistenceError):
    """Raised when the configured backend cannot be built."""

    def __init__(self, detail: str = "Invalid persistence configuration") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class TripNotFoundError(PersistenceError):
    """Raised when a trip identifier does not exist."""

    def __init__(self, detail: str = TRIP_NOT_FOUND_ERROR, trip_id: str | None = None) -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)
        self.trip_id = trip_id


class AuthRequiredError(PersistenceError):
    """Raised when an operation needs a signed-in principal."""

    def __init__(self, detail: str = "Sign in required") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class InvalidCredentialError(AuthRequiredError):
    """Raised when an identity credential cannot be verified."""

    def __init__(self, detail: str = "Invalid or expired credential") -> None:
        super().__init__(detail)


persistence_exception_handler: Callable[[Request, Exception], Awaitable[ORJSONResponse]] = (
    create_exception_handler(logger)
)
