from app.schemas.trip import (
    BUDGET_CATEGORIES,
    Activity,
    ActivityType,
    AddPhotosRequest,
    BudgetBreakdown,
    BudgetType,
    CamelModel,
    CompanyInfo,
    Coordinates,
    DayPlan,
    HealthCheckResponse,
    ItineraryResult,
    MapMarker,
    PhotoAlbum,
    PhotoItem,
    Principal,
    SavedTrip,
    SessionSnapshot,
    SessionView,
    SharePayload,
    SignInRequest,
    TravelerType,
    TripPlan,
    TripRequest,
)

__all__ = [
    "BUDGET_CATEGORIES",
    "Activity",
    "ActivityType",
    "AddPhotosRequest",
    "BudgetBreakdown",
    "BudgetType",
    "CamelModel",
    "CompanyInfo",
    "Coordinates",
    "DayPlan",
    "HealthCheckResponse",
    "ItineraryResult",
    "MapMarker",
    "PhotoAlbum",
    "PhotoItem",
    "Principal",
    "SavedTrip",
    "SessionSnapshot",
    "SessionView",
    "SharePayload",
    "SignInRequest",
    "TravelerType",
    "TripPlan",
    "TripRequest",
]
