# app/schemas/trip.py

"""
Schemas for trip planning requests, generated content and saved trips.

Field names are snake_case in Python and camelCase on the wire, matching
the front end's payloads (``travelerCount``, ``mapsUrl``, ``createdAt``...).
"""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Literal, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from app.configs.settings import (
    DEFAULT_CURRENCY,
    MAX_DESTINATION_LENGTH,
    MAX_INDUSTRY_LENGTH,
    MAX_TRAVELERS,
    MAX_TRIP_DAYS,
    MIN_TRAVELERS,
    MIN_TRIP_DAYS,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class BudgetType(StrEnum):
    ECONOMY = "Economy"
    MODERATE = "Moderate"
    LUXURY = "Luxury"

    @classmethod
    def _missing_(cls, value: object) -> "BudgetType | None":
        # Older clients send "Cheap" for the economy tier.
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "cheap":
                return cls.ECONOMY
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return None


class TravelerType(StrEnum):
    SOLO = "Solo"
    COUPLE = "Couple"
    FAMILY = "Family"
    FRIENDS = "Friends"
    STUDENTS = "Students"

    @classmethod
    def _missing_(cls, value: object) -> "TravelerType | None":
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None


class ActivityType(StrEnum):
    VISIT = "visit"
    FOOD = "food"
    TRAVEL = "travel"
    LEISURE = "leisure"


class SessionView(StrEnum):
    LANDING = "landing"
    FORM = "form"
    LOADING = "loading"
    RESULTS = "results"
    MY_TRIPS = "myTrips"


class TripRequest(CamelModel):
    """
    Trip parameters collected by the planning form.

    Immutable once submitted for a generation cycle.
    """

    model_config = ConfigDict(frozen=True)

    destination: str = Field(
        min_length=1,
        max_length=MAX_DESTINATION_LENGTH,
        description="City or region to visit",
        examples=["Pune, Maharashtra"],
    )
    days: int = Field(ge=MIN_TRIP_DAYS, le=MAX_TRIP_DAYS, description="Trip length in days")
    budget: BudgetType = Field(default=BudgetType.MODERATE, description="Budget tier")
    travelers: TravelerType = Field(default=TravelerType.SOLO, description="Traveler category")
    traveler_count: int = Field(
        default=1,
        ge=MIN_TRAVELERS,
        le=MAX_TRAVELERS,
        description="Number of travelers",
    )
    industry: str = Field(
        min_length=1,
        max_length=MAX_INDUSTRY_LENGTH,
        description="Target industry for company visits",
        examples=["Software & IT"],
    )

    @field_validator("destination", "industry", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class Coordinates(CamelModel):
    lat: float
    lng: float


class Activity(CamelModel):
    time: str = ""
    description: str = ""
    location: str = ""
    type: ActivityType = ActivityType.VISIT
    maps_url: str | None = None
    coordinates: Coordinates | None = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, value: Any) -> Any:
        """Unknown or missing activity categories render as visits."""
        if isinstance(value, str) and value.strip().lower() in ActivityType:
            return value.strip().lower()
        return ActivityType.VISIT

    @field_validator("coordinates", mode="before")
    @classmethod
    def drop_bad_coordinates(cls, value: Any) -> Any:
        if isinstance(value, dict) and not {"lat", "lng"} <= value.keys():
            return None
        return value


class DayPlan(CamelModel):
    day: int = Field(ge=1)
    title: str = ""
    activities: list[Activity] = Field(default_factory=list)


class ItineraryResult(CamelModel):
    destination: str
    overview: str = ""
    days: list[DayPlan] = Field(default_factory=list)

    @model_validator(mode="after")
    def order_days(self) -> Self:
        """Keep day indices unique and increasing; the first plan for a day wins."""
        seen: set[int] = set()
        ordered: list[DayPlan] = []
        for plan in sorted(self.days, key=lambda d: d.day):
            if plan.day not in seen:
                seen.add(plan.day)
                ordered.append(plan)
        self.days = ordered
        return self


class CompanyInfo(CamelModel):
    name: str = ""
    description: str = ""
    website: str | None = None
    distance: str | None = None
    maps_url: str | None = None
    coordinates: Coordinates | None = None


BUDGET_CATEGORIES = ("travel", "accommodation", "food", "activities", "buffer")


class BudgetBreakdown(CamelModel):
    """Per-person cost estimate in five categories plus saving tips."""

    travel: float = Field(default=0, ge=0)
    accommodation: float = Field(default=0, ge=0)
    food: float = Field(default=0, ge=0)
    activities: float = Field(default=0, ge=0)
    buffer: float = Field(default=0, ge=0)
    total: float | None = None
    currency: str = DEFAULT_CURRENCY
    tips: list[str] = Field(default_factory=list)

    @field_validator("currency", mode="before")
    @classmethod
    def default_currency(cls, value: Any) -> Any:
        return value or DEFAULT_CURRENCY

    @field_validator("tips", mode="before")
    @classmethod
    def default_tips(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    @property
    def category_sum(self) -> float:
        return sum(getattr(self, name) for name in BUDGET_CATEGORIES)

    @model_validator(mode="after")
    def repair_total(self) -> Self:
        """Replace a missing or miscomputed total with the category sum."""
        expected = self.category_sum
        if self.total is None or abs(self.total - expected) > 0.5:
            self.total = expected
        return self

    def grand_total(self, traveler_count: int) -> float:
        return (self.total or 0) * traveler_count


class PhotoItem(CamelModel):
    id: str
    url: str
    date: str = Field(description="Capture time, ISO-8601")
    location: str = ""
    tags: list[str] = Field(default_factory=list)


class Principal(CamelModel):
    """An authenticated identity."""

    uid: str
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("photoUrl", "photoURL", "photo_url"),
    )


class TripPlan(CamelModel):
    """Everything one generation cycle produces. Slots are never empty."""

    itinerary: ItineraryResult
    companies: list[CompanyInfo] = Field(default_factory=list)
    budget: BudgetBreakdown
    photos: list[PhotoItem] = Field(default_factory=list)
    degraded: list[str] = Field(
        default_factory=list,
        description="Slots that fell back to placeholder content",
    )
    quota_exceeded: bool = False


class SavedTrip(CamelModel):
    """Durable record of one completed planning session."""

    id: str | None = None
    user_id: str
    destination: str
    created_at: datetime | None = None
    form_data: TripRequest
    itinerary: ItineraryResult
    companies: list[CompanyInfo] = Field(default_factory=list)
    budget: BudgetBreakdown | None = None
    photos: list[PhotoItem] = Field(default_factory=list)

    @field_validator("created_at", mode="before")
    @classmethod
    def from_timestamp(cls, value: Any) -> Any:
        # Records written by the browser demo store {"seconds": ..., "nanoseconds": ...}
        if isinstance(value, dict) and "seconds" in value:
            return datetime.fromtimestamp(
                value["seconds"] + value.get("nanoseconds", 0) / 1e9,
                tz=UTC,
            )
        return value


class SignInRequest(CamelModel):
    credential: str | None = Field(
        default=None,
        description="Google ID token; ignored by the local demo backend",
    )


class SessionSnapshot(CamelModel):
    view: SessionView
    form_data: TripRequest | None = None
    itinerary: ItineraryResult | None = None
    companies: list[CompanyInfo] = Field(default_factory=list)
    budget: BudgetBreakdown | None = None
    photos: list[PhotoItem] = Field(default_factory=list)
    current_trip_id: str | None = None
    share_link: str | None = None
    notice: str | None = None
    degraded: list[str] = Field(default_factory=list)
    quota_exceeded: bool = False
    user: Principal | None = None


class HealthCheckResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    persistence: str
    ai_enabled: bool


class MapMarker(CamelModel):
    lat: float
    lng: float
    title: str
    description: str = ""
    type: str


class SharePayload(CamelModel):
    title: str
    text: str
    url: str | None = None


class PhotoAlbum(CamelModel):
    photos: list[PhotoItem] = Field(default_factory=list)
    locations: list[str] = Field(
        default_factory=list,
        description="Distinct locations across the whole album, for filtering",
    )


class AddPhotosRequest(CamelModel):
    urls: list[str] = Field(min_length=1, description="Image data URIs or remote URLs")
    source: Literal["upload", "camera"] = "upload"
    location: str | None = Field(
        default=None,
        description="Camera address; uploads always use the trip destination",
    )
