"""Trip database model using SQLModel."""

from datetime import datetime
from typing import Any, cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Index, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import TRIPS_COLLECTION


class TripDB(SQLModel, table=True):
    """
    Saved trip document for PostgreSQL.

    The generated content is stored as JSONB documents exactly as the API
    serializes it (camelCase keys), so a row converts to ``SavedTrip``
    without any per-field mapping. Rows are append-only.
    """

    __tablename__ = cast("declared_attr[str]", TRIPS_COLLECTION)

    __table_args__ = (Index("ix_trips_user_created", "user_id", "created_at"),)

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Trip ID",
    )
    user_id: str = Field(
        sa_column=Column(String(128), nullable=False),
        description="Owner principal uid",
    )
    destination: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Trip destination",
    )
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=False, server_default=func.now()),
        description="Creation timestamp (assigned by the database)",
    )

    form_data: dict[str, Any] = Field(sa_column=Column(JSONB, nullable=False))
    itinerary: dict[str, Any] = Field(sa_column=Column(JSONB, nullable=False))
    companies: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False),
    )
    budget: dict[str, Any] | None = Field(default=None, sa_column=Column(JSONB, nullable=True))
    photos: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False),
    )
