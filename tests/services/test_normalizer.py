"""Tests for app/services/normalizer.py module."""

import pytest

from app.errors import AiParseError
from app.services.normalizer import (
    extract_json,
    normalize_itinerary,
    parse_json,
    parse_model_text,
)


class TestExtractJson:
    """Tests for locating the JSON payload inside model text."""

    def test_strips_json_fence(self) -> None:
        assert extract_json('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_bare_fence(self) -> None:
        assert extract_json('```\n[1, 2]\n```') == "[1, 2]"

    def test_drops_surrounding_prose(self) -> None:
        text = 'Here is your plan: {"days": [{"day": 1}]} Enjoy the trip!'
        assert extract_json(text) == '{"days": [{"day": 1}]}'

    def test_array_payload(self) -> None:
        assert extract_json('Companies:\n[{"name": "A"}]\nDone.') == '[{"name": "A"}]'

    def test_no_payload_returns_trimmed_text(self) -> None:
        assert extract_json("   nothing to see   ") == "nothing to see"

    def test_closing_before_opening_returns_trimmed_text(self) -> None:
        assert extract_json(" } oops { ") == "} oops {"


class TestParse:
    """Tests for decoding extracted JSON."""

    def test_parse_model_text(self) -> None:
        assert parse_model_text('```json\n{"destination": "Pune"}\n```') == {"destination": "Pune"}

    def test_invalid_json_raises_parse_error(self) -> None:
        with pytest.raises(AiParseError):
            parse_json("{not json}")

    def test_prose_only_raises_parse_error(self) -> None:
        with pytest.raises(AiParseError):
            parse_model_text("Sorry, I cannot help with that.")


class TestNormalizeItinerary:
    """Tests for repairing decoded itineraries."""

    def test_missing_days_become_empty_list(self) -> None:
        assert normalize_itinerary({"destination": "Pune"})["days"] == []

    def test_non_list_days_become_empty_list(self) -> None:
        assert normalize_itinerary({"days": "two"})["days"] == []

    def test_missing_activities_become_empty_list(self) -> None:
        data = normalize_itinerary({"days": [{"day": 1, "title": "Arrival"}]})
        assert data["days"][0]["activities"] == []

    def test_non_object_days_are_dropped(self) -> None:
        data = normalize_itinerary({"days": [{"day": 1, "activities": []}, "junk"]})
        assert len(data["days"]) == 1

    def test_days_are_numbered_by_position_when_missing(self) -> None:
        data = normalize_itinerary({"days": [{"title": "A"}, {"day": 0}, {"day": "3"}, {"day": True}]})
        assert [day["day"] for day in data["days"]] == [1, 2, 3, 4]

    def test_existing_day_numbers_are_kept(self) -> None:
        data = normalize_itinerary({"days": [{"day": 2}, {"day": 1}]})
        assert [day["day"] for day in data["days"]] == [2, 1]

    def test_non_object_activities_are_dropped(self) -> None:
        data = normalize_itinerary({"days": [{"day": 1, "activities": [{"time": "9"}, "nap"]}]})
        assert data["days"][0]["activities"] == [{"time": "9"}]

    def test_non_object_payload_raises(self) -> None:
        with pytest.raises(AiParseError):
            normalize_itinerary([{"day": 1}])
