"""Tests for app/services/quota.py module."""

from google.genai.errors import ClientError

from app.errors import AiNetworkError, AiQuotaExceededError
from app.services.quota import is_quota_exceeded


class StatusError(Exception):
    def __init__(self, message: str = "", **attrs: object) -> None:
        super().__init__(message)
        for name, value in attrs.items():
            setattr(self, name, value)


class TestTypedErrors:
    def test_quota_error_is_quota(self) -> None:
        assert is_quota_exceeded(AiQuotaExceededError())

    def test_other_ai_errors_decided_by_type(self) -> None:
        assert not is_quota_exceeded(AiNetworkError(detail="upstream returned 429"))


class TestStatusCodes:
    def test_status_attribute(self) -> None:
        assert is_quota_exceeded(StatusError(status=429))

    def test_code_attribute(self) -> None:
        assert is_quota_exceeded(StatusError(code=429))

    def test_status_code_attribute(self) -> None:
        assert is_quota_exceeded(StatusError(status_code=429))

    def test_other_status_is_not_quota(self) -> None:
        assert not is_quota_exceeded(StatusError("server error", status=500))


class TestNestedError:
    def test_nested_code(self) -> None:
        assert is_quota_exceeded(StatusError(error={"code": 429}))

    def test_nested_resource_exhausted(self) -> None:
        assert is_quota_exceeded(StatusError(error={"status": "RESOURCE_EXHAUSTED"}))

    def test_details_body(self) -> None:
        assert is_quota_exceeded(StatusError(details={"error": {"code": 429}}))

    def test_genai_client_error(self) -> None:
        error = ClientError(
            429,
            {"error": {"code": 429, "message": "Rate limited", "status": "RESOURCE_EXHAUSTED"}},
        )
        assert is_quota_exceeded(error)


class TestMessageMarkers:
    def test_quota_in_message(self) -> None:
        assert is_quota_exceeded(RuntimeError("You exceeded your current Quota"))

    def test_exhausted_in_message(self) -> None:
        assert is_quota_exceeded(RuntimeError("Resource has been exhausted"))

    def test_429_in_message(self) -> None:
        assert is_quota_exceeded(RuntimeError("HTTP 429 Too Many Requests"))

    def test_unrelated_failure(self) -> None:
        assert not is_quota_exceeded(ValueError("connection reset by peer"))
