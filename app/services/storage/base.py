"""
Base protocol for trip persistence.

This module defines the interface every trip store implements, so the
session controller and the routes never know which backend is active.
"""

from abc import abstractmethod
from collections.abc import Callable
from typing import Protocol

from app.schemas.trip import Principal, SavedTrip

type AuthCallback = Callable[[Principal | None], None]
type Unsubscribe = Callable[[], None]


class TripStore(Protocol):
    """
    Protocol defining identity and trip persistence operations.

    All store implementations must implement these methods
    to ensure consistent behavior across backends.
    """

    name: str

    @property
    @abstractmethod
    def current_user(self) -> Principal | None:
        """The principal signed in through this store, if any."""
        ...

    @abstractmethod
    async def sign_in(self, credential: str | None = None) -> Principal:
        """
        Sign a principal in and notify auth subscribers.

        Args:
            credential: Identity token; the local demo backend ignores it

        Returns:
            Principal: The signed-in identity
        """
        ...

    @abstractmethod
    async def sign_out(self) -> None:
        """Sign the current principal out and notify auth subscribers."""
        ...

    @abstractmethod
    def on_auth_change(self, callback: AuthCallback) -> Unsubscribe:
        """
        Subscribe to sign-in/sign-out events.

        The callback is invoked immediately with the current principal.

        Returns:
            Unsubscribe: Call to stop receiving events
        """
        ...

    @abstractmethod
    async def authenticate(self, token: str) -> Principal | None:
        """Resolve a bearer token to a principal, or ``None`` if it is not valid."""
        ...

    @abstractmethod
    async def save_trip(self, trip: SavedTrip) -> str:
        """
        Append a new trip record.

        The store assigns the identifier and creation timestamp; any values
        already present on ``trip`` are ignored.

        Returns:
            str: Identifier of the new record
        """
        ...

    @abstractmethod
    async def get_trips(self, user_id: str) -> list[SavedTrip]:
        """Return the trips owned by ``user_id``, newest first."""
        ...

    @abstractmethod
    async def get_trip_by_id(self, trip_id: str) -> SavedTrip | None:
        """Return one trip, or ``None`` when the identifier does not exist."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
