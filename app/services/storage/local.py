"""
Local file-backed trip store.

This module provides the demo persistence backend used when no cloud
database is configured. All trips live in a single JSON file holding a
list of records, newest first, and identity is a fixed demo principal.
"""

from asyncio import Lock, sleep
from datetime import UTC, datetime
from logging import getLogger
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
from orjson import JSONDecodeError, dumps, loads
from pydantic import ValidationError

from app.configs.settings import PersistenceConfig
from app.schemas.trip import Principal, SavedTrip
from app.services.storage.auth_events import AuthEvents
from app.services.storage.base import AuthCallback, Unsubscribe
from app.utils.helpers import epoch_ms, file_logger, utc_now

logger = file_logger(getLogger(__name__))

DEMO_PRINCIPAL = Principal(
    uid="mock-user-123",
    display_name="Demo Traveller",
    email="demo@ivplanner.app",
    photo_url="",
)


class LocalTripStore:
    """
    Local filesystem trip store.

    Writes are serialized with an ``asyncio.Lock`` inside one process;
    separate processes sharing the file can still overwrite each other.
    Identity never survives a restart: the store always starts signed out.
    """

    name = "local"

    def __init__(self, path: Path, delay: float = 0.0) -> None:
        """
        Initialize the store.

        Args:
            path: JSON file holding every trip record
            delay: Artificial latency in seconds added to each operation
        """
        self.path = path
        self.delay = delay
        self.auth = AuthEvents()
        self._lock = Lock()
        self._last_id_ms = 0

    @classmethod
    def from_config(cls, config: PersistenceConfig) -> "LocalTripStore":
        return cls(path=config.local_store_path, delay=config.mock_delay)

    async def _simulate_latency(self) -> None:
        if self.delay > 0:
            await sleep(self.delay)

    # --- Identity ---

    @property
    def current_user(self) -> Principal | None:
        return self.auth.current

    async def sign_in(self, credential: str | None = None) -> Principal:
        logger.info("Mocking Google Sign In...")
        await self._simulate_latency()
        self.auth.emit(DEMO_PRINCIPAL)
        return DEMO_PRINCIPAL

    async def sign_out(self) -> None:
        self.auth.emit(None)

    def on_auth_change(self, callback: AuthCallback) -> Unsubscribe:
        return self.auth.subscribe(callback)

    async def authenticate(self, token: str) -> Principal | None:
        current = self.auth.current
        if current is not None and token == current.uid:
            return current
        return None

    # --- Records ---

    async def _read_all(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            async with aiofiles.open(self.path, "rb") as f:
                raw = await f.read()
            records = loads(raw) if raw else []
        except (OSError, JSONDecodeError):
            logger.exception(f"Unreadable trip store at {self.path}, treating it as empty")
            return []
        return records if isinstance(records, list) else []

    async def _write_all(self, records: list[dict[str, Any]]) -> None:
        # Readers never see a truncated file: the new content is swapped in whole
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        async with aiofiles.open(tmp_path, "wb") as f:
            await f.write(dumps(records))
        await aiofiles.os.replace(tmp_path, self.path)

    def _next_id(self) -> str:
        # Time-derived, bumped when two saves land in the same millisecond
        stamp = max(epoch_ms(), self._last_id_ms + 1)
        self._last_id_ms = stamp
        return f"trip-{stamp}"

    @staticmethod
    def _to_trip(record: dict[str, Any]) -> SavedTrip | None:
        try:
            return SavedTrip.model_validate(record)
        except ValidationError:
            logger.warning(f"Skipping malformed trip record {record.get('id')!r}")
            return None

    async def save_trip(self, trip: SavedTrip) -> str:
        logger.info("Mocking trip save...")
        await self._simulate_latency()

        async with self._lock:
            records = await self._read_all()
            new_id = self._next_id()
            stored = trip.model_copy(update={"id": new_id, "created_at": utc_now()})
            records.insert(0, stored.model_dump(mode="json"))
            await self._write_all(records)

        logger.info(f"Saved trip {new_id} for {trip.user_id}")
        return new_id

    async def get_trips(self, user_id: str) -> list[SavedTrip]:
        await self._simulate_latency()
        records = await self._read_all()

        trips = [
            trip
            for record in records
            if isinstance(record, dict) and record.get("userId") == user_id
            if (trip := self._to_trip(record)) is not None
        ]
        oldest = datetime.min.replace(tzinfo=UTC)
        # Stable sort keeps the newest-first file order for equal timestamps
        trips.sort(key=lambda t: t.created_at or oldest, reverse=True)
        return trips

    async def get_trip_by_id(self, trip_id: str) -> SavedTrip | None:
        await self._simulate_latency()
        for record in await self._read_all():
            if isinstance(record, dict) and record.get("id") == trip_id:
                return self._to_trip(record)
        return None

    async def close(self) -> None:
        return None
