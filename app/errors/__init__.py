from app.errors.ai import (
    AiAuthenticationError,
    AiEmptyResponseError,
    AiError,
    AiNetworkError,
    AiParseError,
    AiQuotaExceededError,
    AiUnavailableError,
    ai_exception_handler,
)
from app.errors.base import BaseAppError, create_exception_handler
from app.errors.persistence import (
    AuthRequiredError,
    InvalidCredentialError,
    PersistenceConfigurationError,
    PersistenceError,
    TripNotFoundError,
    persistence_exception_handler,
)
from app.errors.planning import PlanningError, planning_exception_handler
from app.errors.validation import validation_exception_handler

__all__ = [
    "AiAuthenticationError",
    "AiEmptyResponseError",
    "AiError",
    "AiNetworkError",
    "AiParseError",
    "AiQuotaExceededError",
    "AiUnavailableError",
    "AuthRequiredError",
    "BaseAppError",
    "InvalidCredentialError",
    "PersistenceConfigurationError",
    "PersistenceError",
    "PlanningError",
    "TripNotFoundError",
    "ai_exception_handler",
    "create_exception_handler",
    "persistence_exception_handler",
    "planning_exception_handler",
    "validation_exception_handler",
]
