# app/services/mock_content.py

"""
Placeholder trip content used whenever live generation is unavailable.

Every function here is pure and cannot fail, so the planner can always hand
back a complete plan.
"""

from urllib.parse import quote_plus

from app.configs.settings import DEFAULT_CURRENCY
from app.schemas.trip import (
    Activity,
    ActivityType,
    BudgetBreakdown,
    CompanyInfo,
    Coordinates,
    DayPlan,
    ItineraryResult,
)

SIMULATED_PREFIX = "(SIMULATED MODE: API Quota Exceeded)"
MOCK_DAYS = 2


def maps_search_url(query: str) -> str:
    return f"https://www.google.com/maps/search/?api=1&query={quote_plus(query)}"


def _orientation_day(destination: str, industry: str, day: int) -> DayPlan:
    return DayPlan(
        day=day,
        title="Industry Orientation & City Scoping",
        activities=[
            Activity(
                time="09:00 AM",
                description=f"Introduction to {industry} ecosystem at the Innovation Hub.",
                location=f"{destination} Tech Park",
                type=ActivityType.VISIT,
                maps_url=maps_search_url(f"{destination} Tech Park"),
                coordinates=Coordinates(lat=20.5937, lng=78.9629),
            ),
            Activity(
                time="01:00 PM",
                description="Networking Lunch at Business District.",
                location="Central Plaza Dining",
                type=ActivityType.FOOD,
                maps_url=maps_search_url(f"{destination} Center"),
                coordinates=Coordinates(lat=20.6000, lng=78.9700),
            ),
            Activity(
                time="03:30 PM",
                description="City Landmark Sightseeing and Cultural Walk.",
                location=f"{destination} City Center",
                type=ActivityType.LEISURE,
                maps_url=maps_search_url(f"{destination} City Center"),
                coordinates=Coordinates(lat=20.6100, lng=78.9800),
            ),
        ],
    )


def _operations_day(destination: str, industry: str, day: int) -> DayPlan:
    return DayPlan(
        day=day,
        title="Deep Dive: Manufacturing & Operations",
        activities=[
            Activity(
                time="10:00 AM",
                description="Guided tour of a leading manufacturing facility.",
                location="Industrial Zone Phase 1",
                type=ActivityType.VISIT,
                maps_url=maps_search_url(f"{destination} Industrial Zone"),
                coordinates=Coordinates(lat=20.5800, lng=78.9500),
            ),
            Activity(
                time="02:00 PM",
                description="Transit to secondary site.",
                location="Highway Route",
                type=ActivityType.TRAVEL,
                maps_url=None,
                coordinates=Coordinates(lat=20.5700, lng=78.9400),
            ),
            Activity(
                time="03:00 PM",
                description="Workshop on Supply Chain Management.",
                location="Logistics Center",
                type=ActivityType.VISIT,
                maps_url=maps_search_url(f"{destination} Logistics"),
                coordinates=Coordinates(lat=20.5600, lng=78.9300),
            ),
        ],
    )


DAY_TEMPLATES = (_orientation_day, _operations_day)


def mock_itinerary(destination: str, industry: str, days: int = MOCK_DAYS) -> ItineraryResult:
    """
    Build a sample itinerary with exactly ``days`` day plans (at least one).

    The two template days alternate when more days are requested.
    """
    count = max(days, 1)
    return ItineraryResult(
        destination=destination,
        overview=(
            f"{SIMULATED_PREFIX} Welcome to {destination}! This is a generated sample "
            f"itinerary focusing on the {industry} sector. Enjoy a curated mix of "
            "industrial insights and local culture exploration."
        ),
        days=[
            DAY_TEMPLATES[(day - 1) % len(DAY_TEMPLATES)](destination, industry, day)
            for day in range(1, count + 1)
        ],
    )


def mock_companies(destination: str, industry: str) -> list[CompanyInfo]:
    return [
        CompanyInfo(
            name="Apex Industries Ltd.",
            description=(
                f"A leading player in the {industry} sector known for automated production lines."
            ),
            website="https://example.com",
            distance="5 km from center",
            maps_url=maps_search_url(f"{destination} Industry"),
            coordinates=Coordinates(lat=20.5937, lng=78.9629),
        ),
        CompanyInfo(
            name="Global Tech Solutions",
            description="Innovative hub focusing on R&D and sustainable practices.",
            website="https://example.com",
            distance="8 km from center",
            maps_url=maps_search_url(f"{destination} Tech"),
            coordinates=Coordinates(lat=20.6100, lng=78.9800),
        ),
        CompanyInfo(
            name="Future Systems Corp",
            description="Specializes in export-quality goods and large-scale operations.",
            website="https://example.com",
            distance="12 km from center",
            maps_url=maps_search_url(f"{destination} Systems"),
            coordinates=Coordinates(lat=20.5500, lng=78.9200),
        ),
    ]


def mock_budget() -> BudgetBreakdown:
    return BudgetBreakdown(
        travel=1200,
        accommodation=2500,
        food=1500,
        activities=500,
        buffer=1000,
        total=6700,
        currency=DEFAULT_CURRENCY,
        tips=[
            "Book industrial visits in advance to save on entry fees.",
            "Use local public transport for commuting between zones.",
            "Look for corporate discounts at business hotels.",
            "Eat at factory canteens if permitted for subsidized meals.",
        ],
    )
