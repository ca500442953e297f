# app/services/quota.py

from collections.abc import Mapping
from typing import Any

from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.errors import AiError, AiQuotaExceededError

RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
QUOTA_MARKERS = ("429", "quota", "exhausted")


def _nested_error(error: BaseException) -> Mapping[str, Any] | None:
    nested = getattr(error, "error", None)
    if nested is None:
        # google.genai.errors.APIError keeps the decoded body in ``details``
        details = getattr(error, "details", None)
        if isinstance(details, Mapping):
            nested = details.get("error", details)
    return nested if isinstance(nested, Mapping) else None


def is_quota_exceeded(error: BaseException) -> bool:
    """
    Tell whether a generation failure is a provider quota/rate-limit condition.

    Typed errors from the provider adapter are decided by type alone. Any
    other exception shape is inspected in priority order: an explicit 429
    status code, a nested error object carrying code 429 or the
    ``RESOURCE_EXHAUSTED`` status, and finally a case-insensitive search of
    the message for ``429``, ``quota`` or ``exhausted``.
    """
    if isinstance(error, AiQuotaExceededError):
        return True
    if isinstance(error, AiError):
        return False

    for attr in ("status", "code", "status_code"):
        if getattr(error, attr, None) == HTTP_429_TOO_MANY_REQUESTS:
            return True

    if (nested := _nested_error(error)) is not None:
        if nested.get("code") == HTTP_429_TOO_MANY_REQUESTS:
            return True
        if nested.get("status") == RESOURCE_EXHAUSTED:
            return True

    message = (str(error) or repr(error)).lower()
    return any(marker in message for marker in QUOTA_MARKERS)
