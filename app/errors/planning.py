from collections.abc import Awaitable, Callable
from logging import getLogger

from fastapi.responses import ORJSONResponse
from starlette.requests import Request
from starlette.status import HTTP_502_BAD_GATEWAY

from app.configs.settings import PLAN_GENERATION_ERROR
from app.errors.base import BaseAppError, create_exception_handler
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


class PlanningError(BaseAppError):
    """
    Raised when a generation cycle fails outside every fallback path.

    This is the only planning failure surfaced to the user; the session
    has already been reverted to the form view when it is raised.
    """

    def __init__(self, detail: str = PLAN_GENERATION_ERROR) -> None:
        super().__init__(detail, HTTP_502_BAD_GATEWAY)


planning_exception_handler: Callable[[Request, Exception], Awaitable[ORJSONResponse]] = (
    create_exception_handler(logger)
)
