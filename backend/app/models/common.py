"""Common data types and enums used across the application."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TripStatus(str, Enum):
    """Lifecycle status of a trip."""

    DRAFT = "DRAFT"
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ActivityCategory(str, Enum):
    """Closed set of itinerary activity categories."""

    DINING = "DINING"
    SIGHTSEEING = "SIGHTSEEING"
    ADVENTURE = "ADVENTURE"
    CULTURAL = "CULTURAL"
    ENTERTAINMENT = "ENTERTAINMENT"
    SHOPPING = "SHOPPING"
    RELAXATION = "RELAXATION"
    NIGHTLIFE = "NIGHTLIFE"


class SafetyLevel(str, Enum):
    """Risk level for a destination or a safety topic."""

    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class BudgetLevel(str, Enum):
    """Preferred spending tier from the safety profile."""

    budget = "budget"
    moderate = "moderate"
    luxury = "luxury"


class TravelStyle(str, Enum):
    """Preferred travel style from the safety profile."""

    adventurous = "adventurous"
    relaxed = "relaxed"
    cultural = "cultural"
    mixed = "mixed"


class Pace(str, Enum):
    """Itinerary density preference."""

    relaxed = "relaxed"
    moderate = "moderate"
    packed = "packed"


class CamelModel(BaseModel):
    """Base model for API payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
