# app/services/planner.py

"""
Trip generation orchestration.

Each content slot (itinerary, companies, budget, images) is requested
independently and degrades to placeholder content on its own, so a provider
outage lowers the quality of a plan but never blocks it.
"""

from asyncio import gather
from dataclasses import dataclass, field
from logging import getLogger
from time import perf_counter
from typing import Any

from google.genai.types import Schema, Type
from pydantic import ValidationError

from app.clients.ai_client import AiClient
from app.schemas.trip import (
    BudgetBreakdown,
    CompanyInfo,
    ItineraryResult,
    PhotoItem,
    TripPlan,
    TripRequest,
)
from app.services.mock_content import mock_budget, mock_companies, mock_itinerary
from app.services.normalizer import normalize_itinerary, parse_model_text
from app.services.quota import is_quota_exceeded
from app.utils.helpers import epoch_ms, file_logger, iso_now, time_taken

logger = file_logger(getLogger(__name__))

CITY_VIEW_TAGS = ["City View", "AI Generated"]
INDUSTRY_TAGS = ["Industry", "AI Generated"]

BUDGET_SCHEMA = Schema(
    type=Type.OBJECT,
    properties={
        "travel": Schema(type=Type.NUMBER),
        "accommodation": Schema(type=Type.NUMBER),
        "food": Schema(type=Type.NUMBER),
        "activities": Schema(type=Type.NUMBER),
        "buffer": Schema(type=Type.NUMBER),
        "total": Schema(type=Type.NUMBER),
        "currency": Schema(type=Type.STRING),
        "tips": Schema(type=Type.ARRAY, items=Schema(type=Type.STRING)),
    },
)


def itinerary_prompt(request: TripRequest) -> str:
    return f"""Plan a {request.days}-day industrial visit trip to {request.destination} for a {request.travelers} group.
    The focus industry is {request.industry}. The budget level is {request.budget}.

    You are an expert travel planner with access to Google Maps and Google Search.
    Use Google Maps to find REAL and EXISTING locations for industrial visits, restaurants, and sightseeing.
    Provide exactly {request.days} day(s).

    Return a VALID JSON object (no markdown formatting) with the following structure:
    {{
      "destination": "City Name",
      "overview": "Brief summary",
      "days": [
        {{
          "day": 1,
          "title": "Day Title",
          "activities": [
            {{
              "time": "09:00 AM",
              "description": "Activity details",
              "location": "Real Place Name found on Maps",
              "mapsUrl": "The Google Maps link for the location",
              "coordinates": {{ "lat": 12.34, "lng": 56.78 }},
              "type": "visit" | "food" | "travel" | "leisure"
            }}
          ]
        }}
      ]
    }}

    IMPORTANT: You MUST provide 'coordinates' (lat/lng) for every activity so they can be plotted on a map."""


def companies_prompt(request: TripRequest) -> str:
    return f"""Find top 3 real companies or factories in the {request.industry} sector located in or very near {request.destination} that allow industrial visits.
    Use Google Maps and Google Search to verify their existence, location, and details.

    Return a VALID JSON array (no markdown) where each object has:
    - "name": Company Name
    - "description": Brief description
    - "website": Website URL (if available)
    - "distance": Distance from city center
    - "mapsUrl": Google Maps Link
    - "coordinates": {{ "lat": number, "lng": number }}
    """


def budget_prompt(request: TripRequest) -> str:
    return f"""Create a detailed estimated budget breakdown for a {request.days}-day trip to {request.destination} for {request.traveler_count} people ({request.travelers} group type).
    Budget Level: {request.budget}.
    Industry Focus: {request.industry}.

    Calculate the estimated cost *per person* in Indian Rupees (INR).
    IMPORTANT: Since there are {request.traveler_count} travelers, consider shared costs (like hotel rooms, taxi fare splitting) to give a realistic per-person estimate.

    Return the PER PERSON costs for:
    - travel (local transport/fuel)
    - accommodation (share per person)
    - food
    - activities (entry fees)
    - buffer (emergency funds)
    - total (sum of above)

    Also provide a list of budget saving tips specific to this destination."""


def image_prompts(request: TripRequest) -> tuple[str, str]:
    return (
        f"Cinematic shot of {request.destination} city skyline, futuristic, sci-fi aesthetic, neon lights",
        f"Modern futuristic {request.industry} facility interior in {request.destination}, "
        "high tech, clean, sci-fi style",
    )


def _to_company(item: Any) -> CompanyInfo | None:
    """Validate one provider company, or return ``None`` when it does not validate."""
    if not isinstance(item, dict):
        return None
    try:
        return CompanyInfo.model_validate(item)
    except ValidationError:
        logger.warning(f"Skipping malformed company entry {item.get('name')!r}")
        return None


@dataclass
class GenerationReport:
    """Which slots of one generation cycle fell back to placeholder content."""

    degraded: list[str] = field(default_factory=list)
    quota_exceeded: bool = False

    def record(self, slot: str, error: BaseException) -> None:
        self.degraded.append(slot)
        if is_quota_exceeded(error):
            self.quota_exceeded = True
            logger.warning(f"Quota exceeded while generating {slot}, returning mock {slot}")
        else:
            logger.error(f"{slot.capitalize()} generation failed ({error!r}), returning mock {slot}")


class TripPlanner:
    """
    Issues the generation calls for one trip request.

    The planner holds no per-request state, so a single instance is shared
    by every request the application serves.

    Attributes:
        ai_client: Provider adapter used for every call.
    """

    def __init__(self, ai_client: AiClient) -> None:
        self.ai_client = ai_client

    async def generate_itinerary(
        self,
        request: TripRequest,
        report: GenerationReport | None = None,
    ) -> ItineraryResult:
        """Generate a Maps-grounded itinerary, or the mock itinerary on any failure."""
        try:
            text = await self.ai_client.generate_text(itinerary_prompt(request), grounded=True)
            data = normalize_itinerary(parse_model_text(text))
            data.setdefault("destination", request.destination)
            return ItineraryResult.model_validate(data)
        except Exception as e:
            (report or GenerationReport()).record("itinerary", e)
            return mock_itinerary(request.destination, request.industry, request.days)

    async def find_companies(
        self,
        request: TripRequest,
        report: GenerationReport | None = None,
    ) -> list[CompanyInfo]:
        """
        Find up to three visitable companies in the target industry.

        A valid but empty array is a legitimate answer and is kept as-is.
        """
        try:
            text = await self.ai_client.generate_text(companies_prompt(request), grounded=True)
            data = parse_model_text(text)
            if not isinstance(data, list):
                return []
            return [company for item in data if (company := _to_company(item)) is not None]
        except Exception as e:
            (report or GenerationReport()).record("companies", e)
            return mock_companies(request.destination, request.industry)

    async def calculate_budget(
        self,
        request: TripRequest,
        report: GenerationReport | None = None,
    ) -> BudgetBreakdown:
        try:
            data: Any = await self.ai_client.generate_json(budget_prompt(request), BUDGET_SCHEMA)
            return BudgetBreakdown.model_validate(data)
        except Exception as e:
            (report or GenerationReport()).record("budget", e)
            return mock_budget()

    async def generate_trip_image(self, prompt: str) -> str | None:
        """Images are optional: any failure yields ``None``."""
        try:
            return await self.ai_client.generate_image(prompt)
        except Exception as e:
            logger.error(f"Image generation failed: {e!r}")
            return None

    async def generate_trip_photos(self, request: TripRequest) -> list[PhotoItem]:
        """
        Request the city-view and industry-facility images concurrently.

        Both calls always run to completion; missing images are dropped.
        """
        city_prompt, industry_prompt = image_prompts(request)
        results = await gather(
            self.generate_trip_image(city_prompt),
            self.generate_trip_image(industry_prompt),
            return_exceptions=True,
        )

        stamp = epoch_ms()
        date = iso_now()
        photos: list[PhotoItem] = []
        for idx, (url, tags) in enumerate(zip(results, (CITY_VIEW_TAGS, INDUSTRY_TAGS), strict=True)):
            if not isinstance(url, str) or not url:
                continue
            photos.append(
                PhotoItem(
                    id=f"gen-{stamp}-{idx}",
                    url=url,
                    date=date,
                    location=request.destination,
                    tags=list(tags),
                ),
            )
        return photos

    async def generate_plan(self, request: TripRequest) -> TripPlan:
        """
        Produce a complete plan for ``request``.

        Itinerary, companies and budget are requested one after another,
        then both images concurrently. Provider failures never propagate.
        """
        report = GenerationReport()
        start_time = perf_counter()
        logger.info(f"Generating trip plan for {request.destination} ({request.days} days)")

        itinerary = await self.generate_itinerary(request, report)
        companies = await self.find_companies(request, report)
        budget = await self.calculate_budget(request, report)
        photos = await self.generate_trip_photos(request)

        if report.degraded:
            logger.warning(f"Plan for {request.destination} degraded: {', '.join(report.degraded)}")
        logger.info(f"Trip plan for {request.destination} ready in {time_taken(start_time)}")

        return TripPlan(
            itinerary=itinerary,
            companies=companies,
            budget=budget,
            photos=photos,
            degraded=report.degraded,
            quota_exceeded=report.quota_exceeded,
        )
