# app/services/export.py

"""
Plain-text trip summaries, share links and map markers.

Everything here is a pure function of the trip content so the same text is
produced for downloads, clipboard copies and native share sheets.
"""

from re import compile as re_compile

from app.configs.settings import settings
from app.schemas.trip import (
    BudgetBreakdown,
    CompanyInfo,
    ItineraryResult,
    MapMarker,
    SharePayload,
)

WHITESPACE_RUN = re_compile(r"\s+")

COMPANY_MARKER_DESCRIPTION = "Industrial Target"
COMPANY_MARKER_TYPE = "company"


def format_amount(value: float) -> str:
    """Render ``6700.0`` as ``6700`` and keep real fractions."""
    return str(int(value)) if float(value).is_integer() else str(value)


def share_link(trip_id: str, base_url: str | None = None) -> str:
    return f"{base_url or settings.PUBLIC_BASE_URL}?tripId={trip_id}"


def trip_summary(
    itinerary: ItineraryResult,
    companies: list[CompanyInfo],
    budget: BudgetBreakdown | None,
    traveler_count: int,
    trip_id: str | None = None,
    base_url: str | None = None,
) -> str:
    """
    Build the text export of a trip.

    Args:
        itinerary: Day-by-day plan
        companies: Industry visit targets
        budget: Per-person estimate, omitted from the text when ``None``
        traveler_count: Multiplier for the grand total
        trip_id: Saved trip identifier; adds a share link when set
        base_url: Public front end URL used for the share link

    Returns:
        str: Summary text
    """
    content = f"AI-IV-PLANNER TRIP: {itinerary.destination}\n"

    if trip_id:
        content += f"View detailed plan here: {share_link(trip_id, base_url)}\n\n"

    content += f"Overview: {itinerary.overview}\n\n"

    if itinerary.days:
        content += "--- ITINERARY ---\n"
        for day in itinerary.days:
            content += f"Day {day.day}: {day.title}\n"
            for act in day.activities:
                content += f"- [{act.time}] {act.location}: {act.description} ({act.type})\n"
                if act.maps_url:
                    content += f"  Map: {act.maps_url}\n"
            content += "\n"

    if companies:
        content += "--- INDUSTRY VISITS ---\n"
        for company in companies:
            content += f"- {company.name}: {company.description}\n"
            if company.maps_url:
                content += f"  Map: {company.maps_url}\n"
        content += "\n"

    if budget:
        per_person = budget.total or 0
        content += "--- ESTIMATED BUDGET ---\n"
        content += f"Total per person: {budget.currency} {format_amount(per_person)}\n"
        content += f"Travelers: {traveler_count}\n"
        content += (
            f"Grand Total: {budget.currency} "
            f"{format_amount(budget.grand_total(traveler_count))}\n"
        )

    content += "\nGenerated by AI-IV-Planner"
    return content


def download_filename(destination: str) -> str:
    return f"{WHITESPACE_RUN.sub('_', destination)}_Itinerary.txt"


def copy_text(
    itinerary: ItineraryResult,
    companies: list[CompanyInfo],
    budget: BudgetBreakdown | None,
    traveler_count: int,
    trip_id: str | None = None,
    base_url: str | None = None,
) -> str:
    """Clipboard text: the share link for saved trips, otherwise the full summary."""
    if trip_id:
        return share_link(trip_id, base_url)
    return trip_summary(itinerary, companies, budget, traveler_count)


def share_payload(
    itinerary: ItineraryResult,
    companies: list[CompanyInfo],
    budget: BudgetBreakdown | None,
    traveler_count: int,
    trip_id: str | None = None,
    base_url: str | None = None,
) -> SharePayload:
    title = f"Industrial Trip to {itinerary.destination}"
    if trip_id:
        return SharePayload(
            title=title,
            text=f"Check out this industrial visit plan to {itinerary.destination}!",
            url=share_link(trip_id, base_url),
        )
    return SharePayload(
        title=title,
        text=trip_summary(itinerary, companies, budget, traveler_count),
    )


def map_markers(itinerary: ItineraryResult | None, companies: list[CompanyInfo]) -> list[MapMarker]:
    """Company markers first, then every activity that carries coordinates."""
    markers = [
        MapMarker(
            lat=company.coordinates.lat,
            lng=company.coordinates.lng,
            title=company.name,
            description=COMPANY_MARKER_DESCRIPTION,
            type=COMPANY_MARKER_TYPE,
        )
        for company in companies
        if company.coordinates
    ]

    if itinerary is None:
        return markers

    for day in itinerary.days:
        for act in day.activities:
            if act.coordinates:
                markers.append(
                    MapMarker(
                        lat=act.coordinates.lat,
                        lng=act.coordinates.lng,
                        title=act.location,
                        description=f"{act.description} ({day.title})",
                        type=act.type,
                    ),
                )
    return markers
