"""Tests for app/services/planner.py module."""

from unittest.mock import MagicMock

import orjson
import pytest
from google.genai.errors import ClientError

from app.errors import AiEmptyResponseError, AiNetworkError, AiQuotaExceededError
from app.schemas.trip import TripRequest
from app.services.planner import (
    CITY_VIEW_TAGS,
    INDUSTRY_TAGS,
    GenerationReport,
    TripPlanner,
    image_prompts,
)

ITINERARY_TEXT = """```json
{
  "destination": "Pune",
  "overview": "Auto hub tour",
  "days": [
    {"day": 2, "title": "Plants", "activities": [
      {"time": "10:00 AM", "description": "Assembly line", "location": "Chakan MIDC",
       "type": "visit", "coordinates": {"lat": 18.76, "lng": 73.86}}
    ]},
    {"day": 1, "title": "Arrival"}
  ]
}
```"""

COMPANIES_TEXT = 'Here are the companies:\n[{"name": "Tata Motors", "description": "Cars"}]'


@pytest.fixture
def planner(mock_ai_client: MagicMock) -> TripPlanner:
    return TripPlanner(mock_ai_client)


class TestOfflinePlan:
    """Without an API key every slot degrades to placeholder content."""

    @pytest.mark.asyncio
    async def test_pune_sample_plan(
        self,
        offline_planner: TripPlanner,
        trip_request: TripRequest,
    ) -> None:
        plan = await offline_planner.generate_plan(trip_request)

        assert len(plan.itinerary.days) == 2
        assert plan.itinerary.destination == "Pune, Maharashtra"
        assert len(plan.companies) == 3
        assert plan.budget.total == 6700
        assert plan.budget.currency == "INR"
        assert plan.photos == []
        assert plan.degraded == ["itinerary", "companies", "budget"]
        assert plan.quota_exceeded is False


class TestItinerary:
    @pytest.mark.asyncio
    async def test_parses_fenced_grounded_text(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.return_value = ITINERARY_TEXT

        result = await planner.generate_itinerary(trip_request)

        assert [day.day for day in result.days] == [1, 2]
        assert result.days[0].activities == []
        assert result.days[1].activities[0].location == "Chakan MIDC"
        _, kwargs = mock_ai_client.generate_text.call_args
        assert kwargs == {"grounded": True}

    @pytest.mark.asyncio
    async def test_unparseable_text_falls_back(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.return_value = "I could not find anything."
        report = GenerationReport()

        result = await planner.generate_itinerary(trip_request, report)

        assert len(result.days) == trip_request.days
        assert report.degraded == ["itinerary"]
        assert report.quota_exceeded is False

    @pytest.mark.asyncio
    async def test_quota_is_reported(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.side_effect = AiQuotaExceededError()
        report = GenerationReport()

        result = await planner.generate_itinerary(trip_request, report)

        assert result.overview.startswith("(SIMULATED MODE")
        assert report.quota_exceeded is True

    @pytest.mark.asyncio
    async def test_days_without_numbers_are_kept(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.return_value = (
            '{"destination": "Pune", "days": [{"title": "Arrival"}, {"day": "two", "title": "Plants"}]}'
        )
        report = GenerationReport()

        result = await planner.generate_itinerary(trip_request, report)

        assert [(day.day, day.title) for day in result.days] == [(1, "Arrival"), (2, "Plants")]
        assert report.degraded == []


class TestCompanies:
    @pytest.mark.asyncio
    async def test_parses_array(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.return_value = COMPANIES_TEXT

        companies = await planner.find_companies(trip_request)

        assert [c.name for c in companies] == ["Tata Motors"]

    @pytest.mark.asyncio
    async def test_empty_array_is_kept(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.return_value = "[]"

        assert await planner.find_companies(trip_request) == []

    @pytest.mark.asyncio
    async def test_malformed_entries_do_not_discard_the_answer(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.return_value = (
            '[{"description": "Unnamed plant"}, {"name": "Tata Motors", "coordinates": "near"}, '
            '{"name": "Bajaj Auto"}, "junk"]'
        )
        report = GenerationReport()

        companies = await planner.find_companies(trip_request, report)

        assert [(c.name, c.description) for c in companies] == [("", "Unnamed plant"), ("Bajaj Auto", "")]
        assert report.degraded == []

    @pytest.mark.asyncio
    async def test_non_array_yields_empty_list(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.return_value = '{"name": "Tata Motors"}'

        assert await planner.find_companies(trip_request) == []

    @pytest.mark.asyncio
    async def test_empty_response_falls_back(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.side_effect = AiEmptyResponseError()

        companies = await planner.find_companies(trip_request)

        assert len(companies) == 3


class TestBudget:
    @pytest.mark.asyncio
    async def test_missing_total_is_computed(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_json.return_value = {
            "travel": 800,
            "accommodation": 2000,
            "food": 1200,
            "activities": 400,
            "buffer": 600,
            "tips": ["Share autos"],
        }

        budget = await planner.calculate_budget(trip_request)

        assert budget.total == 5000
        assert budget.currency == "INR"

    @pytest.mark.asyncio
    async def test_network_failure_falls_back(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_json.side_effect = AiNetworkError()
        report = GenerationReport()

        budget = await planner.calculate_budget(trip_request, report)

        assert budget.total == 6700
        assert report.degraded == ["budget"]
        assert report.quota_exceeded is False


class TestPhotos:
    @pytest.mark.asyncio
    async def test_both_images(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_image.side_effect = ["data:image/png;base64,AAA", "data:image/png;base64,BBB"]

        photos = await planner.generate_trip_photos(trip_request)

        assert [p.url for p in photos] == ["data:image/png;base64,AAA", "data:image/png;base64,BBB"]
        assert photos[0].tags == CITY_VIEW_TAGS
        assert photos[1].tags == INDUSTRY_TAGS
        assert photos[0].id.startswith("gen-")
        assert photos[0].id.endswith("-0")
        assert photos[1].id.endswith("-1")
        assert all(p.location == trip_request.destination for p in photos)

    @pytest.mark.asyncio
    async def test_one_image_fails(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_image.side_effect = [RuntimeError("boom"), "data:image/png;base64,BBB"]

        photos = await planner.generate_trip_photos(trip_request)

        assert len(photos) == 1
        assert photos[0].tags == INDUSTRY_TAGS

    @pytest.mark.asyncio
    async def test_no_images(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_image.return_value = None

        assert await planner.generate_trip_photos(trip_request) == []

    def test_image_prompts(self, trip_request: TripRequest) -> None:
        city, industry = image_prompts(trip_request)

        assert "Pune, Maharashtra city skyline" in city
        assert "Automobile facility interior" in industry


class TestGeneratePlan:
    @pytest.mark.asyncio
    async def test_live_plan_is_not_degraded(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.side_effect = [ITINERARY_TEXT, COMPANIES_TEXT]
        mock_ai_client.generate_json.return_value = orjson.loads(
            b'{"travel": 1, "accommodation": 2, "food": 3, "activities": 4, "buffer": 5, "total": 15}',
        )

        plan = await planner.generate_plan(trip_request)

        assert plan.degraded == []
        assert plan.itinerary.overview == "Auto hub tour"
        assert plan.companies[0].name == "Tata Motors"
        assert plan.budget.total == 15

    @pytest.mark.asyncio
    async def test_quota_flag_on_plan(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.side_effect = AiQuotaExceededError()
        mock_ai_client.generate_json.side_effect = AiQuotaExceededError()

        plan = await planner.generate_plan(trip_request)

        assert plan.quota_exceeded is True
        assert plan.degraded == ["itinerary", "companies", "budget"]
        assert len(plan.itinerary.days) == 2


class TestUntypedFailures:
    """Exceptions that did not come through the provider adapter's error mapping."""

    @pytest.mark.asyncio
    async def test_runtime_error_in_itinerary(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.side_effect = RuntimeError("socket closed")
        report = GenerationReport()

        result = await planner.generate_itinerary(trip_request, report)

        assert len(result.days) == trip_request.days
        assert report.degraded == ["itinerary"]
        assert report.quota_exceeded is False

    @pytest.mark.asyncio
    async def test_raw_sdk_429_in_companies(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.side_effect = ClientError(
            429,
            {"error": {"code": 429, "message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}},
        )
        report = GenerationReport()

        companies = await planner.find_companies(trip_request, report)

        assert len(companies) == 3
        assert report.degraded == ["companies"]
        assert report.quota_exceeded is True

    @pytest.mark.asyncio
    async def test_value_error_in_budget(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_json.side_effect = ValueError("unexpected payload")
        report = GenerationReport()

        budget = await planner.calculate_budget(trip_request, report)

        assert budget.total == 6700
        assert report.degraded == ["budget"]
        assert report.quota_exceeded is False

    @pytest.mark.asyncio
    async def test_plan_survives_mixed_failures(
        self,
        planner: TripPlanner,
        mock_ai_client: MagicMock,
        trip_request: TripRequest,
    ) -> None:
        mock_ai_client.generate_text.side_effect = [
            KeyError("candidates"),
            ClientError(429, {"error": {"code": 429, "status": "RESOURCE_EXHAUSTED"}}),
        ]
        mock_ai_client.generate_json.side_effect = TypeError("bad schema")
        mock_ai_client.generate_image.side_effect = OSError("offline")

        plan = await planner.generate_plan(trip_request)

        assert plan.degraded == ["itinerary", "companies", "budget"]
        assert plan.quota_exceeded is True
        assert plan.photos == []
        assert len(plan.itinerary.days) == 2
