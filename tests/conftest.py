# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so the environment must be fixed
# before anything under app/ is imported.
os.environ["GEMINI_API_KEY"] = ""
os.environ["PERSISTENCE_BACKEND"] = "local"
os.environ["MOCK_NETWORK_DELAY"] = "0"
os.environ["LOG_TO_FILE"] = "false"
os.environ["PUBLIC_BASE_URL"] = "https://ivplanner.test"

from pathlib import Path  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from app.clients.ai_client import AiClient  # noqa: E402
from app.schemas.trip import SavedTrip, TripRequest  # noqa: E402
from app.services.mock_content import mock_budget, mock_companies, mock_itinerary  # noqa: E402
from app.services.planner import TripPlanner  # noqa: E402
from app.services.storage import LocalTripStore  # noqa: E402


@pytest.fixture
def trip_request() -> TripRequest:
    return TripRequest(
        destination="Pune, Maharashtra",
        days=2,
        budget="Moderate",
        travelers="Students",
        traveler_count=4,
        industry="Automobile",
    )


@pytest.fixture
def mock_ai_client() -> MagicMock:
    """AI client whose every call must be configured by the test."""
    client = MagicMock(spec=AiClient)
    client.enabled = True
    client.generate_text = AsyncMock()
    client.generate_json = AsyncMock()
    client.generate_image = AsyncMock(return_value=None)
    client.close = AsyncMock()
    return client


@pytest.fixture
def offline_planner() -> TripPlanner:
    """Planner without an API key: every slot falls back to mock content."""
    return TripPlanner(AiClient(api_key=""))


@pytest.fixture
def local_store(tmp_path: Path) -> LocalTripStore:
    return LocalTripStore(path=tmp_path / "iv_planner_trips.json")


@pytest.fixture
def saved_trip(trip_request: TripRequest) -> SavedTrip:
    return SavedTrip(
        user_id="mock-user-123",
        destination=trip_request.destination,
        form_data=trip_request,
        itinerary=mock_itinerary(trip_request.destination, trip_request.industry, 2),
        companies=mock_companies(trip_request.destination, trip_request.industry),
        budget=mock_budget(),
    )
