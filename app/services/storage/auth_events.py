"""Observable holding the signed-in principal of one trip store."""

from logging import getLogger

from app.schemas.trip import Principal
from app.services.storage.base import AuthCallback, Unsubscribe
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


class AuthEvents:
    """
    Subscriber registry for sign-in/sign-out notifications.

    Lifecycle: ``subscribe`` registers a callback and immediately calls it
    with the current principal; the returned function removes it again and
    may be called any number of times. Each store instance owns its own
    registry, so independent stores never notify each other's subscribers.
    """

    def __init__(self) -> None:
        self._subscribers: list[AuthCallback] = []
        self._current: Principal | None = None

    @property
    def current(self) -> Principal | None:
        return self._current

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: AuthCallback) -> Unsubscribe:
        self._subscribers.append(callback)
        callback(self._current)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, principal: Principal | None) -> None:
        """Set the current principal and notify every subscriber."""
        self._current = principal
        # Copy so callbacks may unsubscribe while being notified
        for callback in list(self._subscribers):
            try:
                callback(principal)
            except Exception:
                logger.exception("Auth subscriber failed")
