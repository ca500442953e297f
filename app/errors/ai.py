from collections.abc import Awaitable, Callable
from logging import getLogger

from fastapi.responses import ORJSONResponse
from starlette.requests import Request
from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from app.errors.base import BaseAppError, create_exception_handler
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


class AiError(BaseAppError):
    """Base exception for AI client errors."""

    def __init__(self, detail: str = "AI client error") -> None:
        super().__init__(
            detail=detail,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


class AiAuthenticationError(AiError):
    """Authentication failed."""

    def __init__(self, detail: str = "AI authentication failed") -> None:
        super().__init__(detail)
        self.status_code = HTTP_401_UNAUTHORIZED


class AiQuotaExceededError(AiError):
    """Provider quota or rate limit exhausted."""

    def __init__(self, detail: str = "AI quota exceeded") -> None:
        super().__init__(detail)
        self.status_code = HTTP_429_TOO_MANY_REQUESTS


class AiNetworkError(AiError):
    """Network connectivity issues."""

    def __init__(self, detail: str = "AI network error") -> None:
        super().__init__(detail)
        self.status_code = HTTP_503_SERVICE_UNAVAILABLE


class AiParseError(AiError):
    """The provider answered, but the payload is not valid structured data."""

    def __init__(self, detail: str = "Invalid AI response") -> None:
        super().__init__(detail)
        self.status_code = HTTP_502_BAD_GATEWAY


class AiEmptyResponseError(AiError):
    """The provider answered with no usable content."""

    def __init__(self, detail: str = "Empty response from Gemini API") -> None:
        super().__init__(detail)
        self.status_code = HTTP_502_BAD_GATEWAY


class AiUnavailableError(AiError):
    """No AI client is configured (missing API key)."""

    def __init__(self, detail: str = "AI service is not configured") -> None:
        super().__init__(detail)
        self.status_code = HTTP_503_SERVICE_UNAVAILABLE


ai_exception_handler: Callable[[Request, Exception], Awaitable[ORJSONResponse]] = (
    create_exception_handler(logger)
)
