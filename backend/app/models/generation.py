"""Inputs to and normalized outputs of AI trip-artifact generation."""

from __future__ import annotations

import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .common import ActivityCategory, CamelModel, Pace, SafetyLevel


class TripContext(BaseModel):
    """The slice of a trip that prompt construction reads."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    destination: str
    country: str
    city: str | None = None
    start_date: datetime.date
    end_date: datetime.date
    budget: float
    currency: str = "USD"
    number_of_travelers: int = 1


class TravelerProfile(BaseModel):
    """Safety-relevant traveler attributes, read from a stored safety profile."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    is_lgbtq: bool = False
    is_solo_female: bool = False
    has_accessibility_needs: bool = False
    religious_minority: bool = False
    dietary_restrictions: list[str] = Field(default_factory=list)
    language_barriers: list[str] = Field(default_factory=list)


class ItineraryPreferences(CamelModel):
    """Optional knobs for itinerary generation."""

    model_config = ConfigDict(frozen=True)

    activities: list[ActivityCategory] = Field(
        default_factory=list, description="Preferred activity categories"
    )
    pace: Pace | None = Field(
        default=None,
        validation_alias=AliasChoices("pace", "pacePreference", "pace_preference"),
    )
    include_downtime: bool = Field(
        default=False, description="Leave rest periods between activities"
    )


class NormalizedActivity(BaseModel):
    """Activity after coercion; order is its position in the day."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: ActivityCategory
    location: str
    address: str | None = None
    start_time: str | None = None
    duration: int | None = None
    estimated_cost: float | None = None
    currency: str
    safety_notes: str | None = None
    requires_booking: bool = False


class NormalizedDay(BaseModel):
    """Day after coercion; day number and date are derived from position."""

    model_config = ConfigDict(frozen=True)

    day_number: int = Field(ge=1)
    date: datetime.date
    theme: str | None = None
    activities: tuple[NormalizedActivity, ...] = ()


class NormalizedItinerary(BaseModel):
    """Itinerary ready for persistence: exactly one entry per trip day."""

    model_config = ConfigDict(frozen=True)

    days: tuple[NormalizedDay, ...]


class NormalizedSafetySection(BaseModel):
    """Safety section after coercion."""

    model_config = ConfigDict(frozen=True)

    title: str
    level: SafetyLevel
    content: str
    tips: tuple[str, ...] = ()
    resources: tuple[str, ...] = ()


class NormalizedSafetyReport(BaseModel):
    """Safety report ready for persistence."""

    model_config = ConfigDict(frozen=True)

    overall_level: SafetyLevel
    summary: str
    sections: tuple[NormalizedSafetySection, ...] = ()
