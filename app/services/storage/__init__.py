"""
Trip storage package.

This package provides the persistence backends for saved trips,
with support for a cloud database and a local demo file.
"""

from app.configs.settings import PersistenceConfig
from app.errors import PersistenceConfigurationError
from app.services.storage.auth_events import AuthEvents
from app.services.storage.base import AuthCallback, TripStore, Unsubscribe
from app.services.storage.cloud import CloudTripStore
from app.services.storage.local import DEMO_PRINCIPAL, LocalTripStore


def get_trip_store(config: PersistenceConfig) -> TripStore:
    """
    Build the trip store selected by ``config.backend``.

    Returns:
        TripStore: Configured store instance

    Raises:
        PersistenceConfigurationError: For an unknown backend name, or a
            cloud backend without a database URL.
    """
    if config.backend == "cloud":
        return CloudTripStore.from_config(config)
    if config.backend == "local":
        return LocalTripStore.from_config(config)
    msg = f"Unknown persistence backend: {config.backend!r}"
    raise PersistenceConfigurationError(detail=msg)


__all__ = [
    "DEMO_PRINCIPAL",
    "AuthCallback",
    "AuthEvents",
    "CloudTripStore",
    "LocalTripStore",
    "TripStore",
    "Unsubscribe",
    "get_trip_store",
]
