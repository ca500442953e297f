# app/services/normalizer.py

"""
Turn raw model text into structured data.

Grounded generation (Maps/Search tools) cannot be combined with a response
schema, so itinerary and company answers arrive as free text that may be
wrapped in markdown fences or surrounded by prose.
"""

from re import compile as re_compile
from typing import Any

from orjson import JSONDecodeError, loads

from app.errors import AiParseError

FENCE_PATTERN = re_compile(r"```(?:json)?\n?|\n?```")


def extract_json(text: str) -> str:
    """
    Return the brace/bracket-bounded JSON candidate inside ``text``.

    Code fences are stripped first. The candidate runs from the first ``{`` or
    ``[`` to the last ``}`` or ``]``, inclusive. When no such ordered pair
    exists the trimmed text is returned unchanged.

    Examples:
    --------
    >>> extract_json('```json\\n{"a": 1}\\n```')
    '{"a": 1}'
    >>> extract_json("  no payload here ")
    'no payload here'
    """
    cleaned = FENCE_PATTERN.sub("", text)

    starts = [i for i in (cleaned.find("{"), cleaned.find("[")) if i != -1]
    ends = [i for i in (cleaned.rfind("}"), cleaned.rfind("]")) if i != -1]

    if starts and ends:
        start, end = min(starts), max(ends)
        if end > start:
            return cleaned[start : end + 1]

    return cleaned.strip()


def parse_json(text: str) -> Any:
    """
    Decode a JSON candidate.

    Raises:
        AiParseError: If the text is not valid JSON.
    """
    try:
        return loads(text)
    except JSONDecodeError as e:
        preview = text[:80].replace("\n", " ")
        raise AiParseError(detail=f"Could not decode AI response: {preview!r}") from e


def parse_model_text(text: str) -> Any:
    return parse_json(extract_json(text))


def _day_number(value: Any, position: int) -> int:
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return position
    return value


def normalize_itinerary(data: Any) -> dict[str, Any]:
    """
    Repair the list fields of a decoded itinerary in place.

    ``days`` becomes an empty list when absent or not a list, and every day
    gets an ``activities`` list. A day without a usable ``day`` number is
    numbered by its position in the list.

    Raises:
        AiParseError: If the payload is not an object at all.
    """
    if not isinstance(data, dict):
        msg = f"Expected an itinerary object, got {type(data).__name__}"
        raise AiParseError(detail=msg)

    days = data.get("days")
    if not isinstance(days, list):
        days = []
    days = [day for day in days if isinstance(day, dict)]
    for position, day in enumerate(days, start=1):
        activities = day.get("activities")
        if not isinstance(activities, list):
            activities = []
        day["activities"] = [act for act in activities if isinstance(act, dict)]
        day["day"] = _day_number(day.get("day"), position)
    data["days"] = days
    return data
