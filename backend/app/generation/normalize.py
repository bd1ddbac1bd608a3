"""Parse and normalize raw AI completions into domain values.

Parsing never raises. Each parser returns a ``ParseResult`` that is either
``ok`` with a frozen normalized value, or carries an ``error_kind``:

- ``invalid_json``: the text is not JSON (after stripping a code fence)
- ``invalid_structure``: the JSON is not shaped like the artifact at all
  (root not an object, or a collection that is not a list of objects)

Anything short of that is coerced toward the nearest valid value rather than
rejected: unknown enum labels, missing text, non-numeric numbers and so on.
"""

from __future__ import annotations

import json
import math
from datetime import date, timedelta
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict

from backend.app.generation.prompts import day_count
from backend.app.models.common import ActivityCategory, SafetyLevel
from backend.app.models.generation import (
    NormalizedActivity,
    NormalizedDay,
    NormalizedItinerary,
    NormalizedSafetyReport,
    NormalizedSafetySection,
)

T = TypeVar("T")

ErrorKind = Literal["invalid_json", "invalid_structure"]

# Larger values are treated as missing; they would not fit the storage columns
MAX_AMOUNT = 1_000_000_000.0
MAX_DURATION_MINUTES = 7 * 24 * 60


class ParseResult(BaseModel, Generic[T]):
    """Outcome of parsing one completion."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    value: T | None = None
    error_kind: ErrorKind | None = None
    detail: str | None = None

    @classmethod
    def success(cls, value: T) -> ParseResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, detail: str) -> ParseResult[T]:
        return cls(ok=False, error_kind=kind, detail=detail)


class _StructureError(Exception):
    pass


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    content = text.strip()
    if "```json" in content:
        content = content.split("```json", 1)[1].split("```", 1)[0]
    elif content.startswith("```"):
        content = content.split("```", 2)[1]
    return content.strip()


def _load_object(text: str) -> dict[str, Any]:
    """Decode JSON text whose root must be an object.

    Raises:
        json.JSONDecodeError: Text is not JSON
        _StructureError: Root is not an object
    """
    data = json.loads(strip_code_fence(text))
    if not isinstance(data, dict):
        raise _StructureError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _object_list(container: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = container.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _StructureError(f"'{key}' must be a list, got {type(value).__name__}")
    for index, item in enumerate(value):
        if not isinstance(item, dict):
            raise _StructureError(f"'{key}[{index}]' must be an object")
    return value


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool | int | float):
        return str(value)
    return ""


def _optional_text(value: Any) -> str | None:
    text = _text(value)
    return text or None


def _number(value: Any, limit: float = MAX_AMOUNT) -> float | None:
    """Non-negative finite number no larger than ``limit``, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int | float):
        return None
    if isinstance(value, int) and value > limit:
        return None
    number = float(value)
    if math.isnan(number) or math.isinf(number) or not 0 <= number <= limit:
        return None
    return number


def _minutes(value: Any) -> int | None:
    number = _number(value, limit=MAX_DURATION_MINUTES)
    return None if number is None else int(round(number))


def _string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1"}
    return bool(value)


def _currency(value: Any, default: str) -> str:
    text = _text(value).upper()
    return text if len(text) == 3 and text.isalpha() else default


def coerce_safety_level(value: Any) -> SafetyLevel:
    """Case-insensitive match against SafetyLevel; anything else is MODERATE."""
    if isinstance(value, str):
        try:
            return SafetyLevel(value.strip().upper())
        except ValueError:
            pass
    return SafetyLevel.MODERATE


def coerce_category(value: Any) -> ActivityCategory:
    """Case-insensitive match against ActivityCategory; anything else is SIGHTSEEING."""
    if isinstance(value, str):
        try:
            return ActivityCategory(value.strip().upper())
        except ValueError:
            pass
    return ActivityCategory.SIGHTSEEING


def _activity(raw: dict[str, Any], currency: str) -> NormalizedActivity:
    return NormalizedActivity(
        name=_text(raw.get("name")),
        description=_text(raw.get("description")),
        category=coerce_category(raw.get("category")),
        location=_text(raw.get("location")),
        address=_optional_text(raw.get("address")),
        start_time=_optional_text(raw.get("startTime")),
        duration=_minutes(raw.get("duration")),
        estimated_cost=_number(raw.get("estimatedCost")),
        currency=_currency(raw.get("currency"), currency),
        safety_notes=_optional_text(raw.get("safetyNotes")),
        requires_booking=_flag(raw.get("requiresBooking")),
    )


def parse_itinerary(
    text: str, start_date: date, end_date: date, currency: str
) -> ParseResult[NormalizedItinerary]:
    """Parse an itinerary completion for a trip.

    Day numbers and dates are assigned from array position. The result always
    has exactly ``day_count(start_date, end_date)`` days: extra days are dropped
    and missing ones are padded empty.

    Args:
        text: Raw completion text
        start_date: Trip start date (day 1)
        end_date: Trip end date
        currency: Trip currency, used when an activity omits or garbles its own

    Returns:
        ParseResult wrapping a NormalizedItinerary
    """
    try:
        data = _load_object(text)
        raw_days = _object_list(data, "days")
        raw_activities = [_object_list(day, "activities") for day in raw_days]
    except json.JSONDecodeError as e:
        return ParseResult.failure("invalid_json", str(e))
    except _StructureError as e:
        return ParseResult.failure("invalid_structure", str(e))

    total = day_count(start_date, end_date)
    days = []
    for index in range(total):
        theme = None
        activities: tuple[NormalizedActivity, ...] = ()
        if index < len(raw_days):
            theme = _optional_text(raw_days[index].get("theme"))
            activities = tuple(_activity(a, currency) for a in raw_activities[index])
        days.append(
            NormalizedDay(
                day_number=index + 1,
                date=start_date + timedelta(days=index),
                theme=theme,
                activities=activities,
            )
        )

    return ParseResult.success(NormalizedItinerary(days=tuple(days)))


def parse_safety_report(text: str) -> ParseResult[NormalizedSafetyReport]:
    """Parse a safety report completion."""
    try:
        data = _load_object(text)
        raw_sections = _object_list(data, "sections")
    except json.JSONDecodeError as e:
        return ParseResult.failure("invalid_json", str(e))
    except _StructureError as e:
        return ParseResult.failure("invalid_structure", str(e))

    sections = tuple(
        NormalizedSafetySection(
            title=_text(raw.get("title")),
            level=coerce_safety_level(raw.get("level")),
            content=_text(raw.get("content")),
            tips=_string_list(raw.get("tips")),
            resources=_string_list(raw.get("resources")),
        )
        for raw in raw_sections
    )
    return ParseResult.success(
        NormalizedSafetyReport(
            overall_level=coerce_safety_level(data.get("overallLevel")),
            summary=_text(data.get("summary")),
            sections=sections,
        )
    )


def parse_suggestions(text: str) -> ParseResult[dict[str, Any]]:
    """Parse a hotel or flight suggestions completion; content is kept opaque."""
    try:
        data = _load_object(text)
    except json.JSONDecodeError as e:
        return ParseResult.failure("invalid_json", str(e))
    except _StructureError as e:
        return ParseResult.failure("invalid_structure", str(e))
    return ParseResult.success(data)
