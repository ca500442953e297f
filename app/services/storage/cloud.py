"""
Cloud database trip store.

Trips are rows of the ``trips`` table whose content columns are JSONB
documents. The database assigns identifiers and creation timestamps, and
owner queries go through the ``(user_id, created_at)`` index. Identity is
a Google account, proven by a Google-issued ID token.
"""

from logging import getLogger
from typing import Any
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request as GoogleRequest
from google.oauth2 import id_token
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import col

from app.configs.settings import PersistenceConfig
from app.db import (
    SessionFactory,
    close_db,
    create_engine,
    create_session_factory,
    init_db,
    transaction,
)
from app.errors import InvalidCredentialError, PersistenceError
from app.models import TripDB
from app.schemas.trip import Principal, SavedTrip
from app.services.storage.auth_events import AuthEvents
from app.services.storage.base import AuthCallback, Unsubscribe
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


def verify_google_token(token: str, audience: str | None) -> dict[str, Any]:
    """Verify a Google ID token and return its claims (blocking)."""
    return id_token.verify_oauth2_token(token, GoogleRequest(), audience=audience)


class CloudTripStore:
    """
    PostgreSQL trip store.

    Attributes:
        name: Backend name reported by the health check.
    """

    name = "cloud"

    def __init__(
        self,
        session_factory: SessionFactory,
        google_client_id: str | None = None,
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._google_client_id = google_client_id
        self._engine = engine
        self.auth = AuthEvents()

    @classmethod
    def from_config(cls, config: PersistenceConfig) -> "CloudTripStore":
        engine = create_engine(config)
        return cls(
            session_factory=create_session_factory(engine),
            google_client_id=config.google_client_id,
            engine=engine,
        )

    async def initialize(self) -> None:
        if self._engine is not None:
            await init_db(self._engine)

    # --- Identity ---

    @property
    def current_user(self) -> Principal | None:
        return self.auth.current

    async def _verify(self, token: str) -> Principal:
        try:
            claims = await run_in_threadpool(verify_google_token, token, self._google_client_id)
        except (ValueError, GoogleAuthError) as e:
            raise InvalidCredentialError from e

        return Principal(
            uid=claims["sub"],
            display_name=claims.get("name"),
            email=claims.get("email"),
            photo_url=claims.get("picture"),
        )

    async def sign_in(self, credential: str | None = None) -> Principal:
        if not credential:
            raise InvalidCredentialError(detail="A Google ID token is required to sign in")
        principal = await self._verify(credential)
        self.auth.emit(principal)
        logger.info(f"Signed in {principal.uid}")
        return principal

    async def sign_out(self) -> None:
        self.auth.emit(None)

    def on_auth_change(self, callback: AuthCallback) -> Unsubscribe:
        return self.auth.subscribe(callback)

    async def authenticate(self, token: str) -> Principal | None:
        try:
            return await self._verify(token)
        except InvalidCredentialError:
            return None

    # --- Records ---

    @staticmethod
    def _to_trip(row: TripDB) -> SavedTrip:
        return SavedTrip.model_validate(
            {
                "id": str(row.id),
                "user_id": row.user_id,
                "destination": row.destination,
                "created_at": row.created_at,
                "form_data": row.form_data,
                "itinerary": row.itinerary,
                "companies": row.companies,
                "budget": row.budget,
                "photos": row.photos,
            },
        )

    async def save_trip(self, trip: SavedTrip) -> str:
        row = TripDB(
            user_id=trip.user_id,
            destination=trip.destination,
            form_data=trip.form_data.model_dump(mode="json"),
            itinerary=trip.itinerary.model_dump(mode="json"),
            companies=[c.model_dump(mode="json") for c in trip.companies],
            budget=trip.budget.model_dump(mode="json") if trip.budget else None,
            photos=[p.model_dump(mode="json") for p in trip.photos],
        )
        try:
            async with transaction(self._session_factory) as session:
                session.add(row)
                await session.flush()
                await session.refresh(row)
        except SQLAlchemyError as e:
            raise PersistenceError(detail="Failed to save trip") from e

        logger.info(f"Saved trip {row.id} for {trip.user_id}")
        return str(row.id)

    async def get_trips(self, user_id: str) -> list[SavedTrip]:
        statement = (
            select(TripDB)
            .where(col(TripDB.user_id) == user_id)
            .order_by(col(TripDB.created_at).desc())
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise PersistenceError(detail="Failed to fetch trips") from e
        return [self._to_trip(row) for row in rows]

    async def get_trip_by_id(self, trip_id: str) -> SavedTrip | None:
        try:
            key = UUID(trip_id)
        except ValueError:
            return None

        try:
            async with self._session_factory() as session:
                row = await session.get(TripDB, key)
        except SQLAlchemyError:
            logger.exception(f"Error getting trip by ID {trip_id}")
            return None
        return self._to_trip(row) if row else None

    async def close(self) -> None:
        if self._engine is not None:
            await close_db(self._engine)
