"""Response schemas shared by the API routers.

All schemas read straight from ORM rows (``from_attributes``) and serialize
with camelCase keys. Primary keys are exposed as ``id``.
"""

import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, Field

from backend.app.models.common import (
    ActivityCategory,
    BudgetLevel,
    CamelModel,
    SafetyLevel,
    TravelStyle,
    TripStatus,
)


class SafetyProfileOut(CamelModel):
    """Stored safety profile."""

    id: UUID = Field(validation_alias=AliasChoices("id", "profile_id"))
    user_id: UUID
    is_lgbtq: bool = Field(
        serialization_alias="isLGBTQ",
        validation_alias=AliasChoices("is_lgbtq", "isLGBTQ"),
    )
    is_solo_female: bool
    has_accessibility_needs: bool
    religious_minority: bool
    dietary_restrictions: list[str]
    language_barriers: list[str]
    preferred_budget_level: BudgetLevel | None = None
    travel_style: TravelStyle | None = None
    updated_at: datetime.datetime


class UserOut(CamelModel):
    """User without credentials."""

    id: UUID = Field(validation_alias=AliasChoices("id", "user_id"))
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    created_at: datetime.datetime
    safety_profile: SafetyProfileOut | None = None


class ActivityOut(CamelModel):
    id: UUID = Field(validation_alias=AliasChoices("id", "activity_id"))
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
    requires_booking: bool
    order: int


class ItineraryDayOut(CamelModel):
    id: UUID = Field(validation_alias=AliasChoices("id", "day_id"))
    day_number: int
    date: datetime.date
    theme: str | None = None
    activities: list[ActivityOut]


class ItineraryOut(CamelModel):
    """Full itinerary, days ordered by number and activities by order."""

    id: UUID = Field(validation_alias=AliasChoices("id", "itinerary_id"))
    trip_id: UUID
    ai_model: str | None = None
    generated_at: datetime.datetime
    days: list[ItineraryDayOut]


class SafetySectionOut(CamelModel):
    id: UUID = Field(validation_alias=AliasChoices("id", "section_id"))
    title: str
    level: SafetyLevel
    content: str
    tips: list[str]
    resources: list[str]
    order: int


class SafetyReportOut(CamelModel):
    """Full safety report with ordered sections."""

    id: UUID = Field(validation_alias=AliasChoices("id", "report_id"))
    trip_id: UUID
    overall_level: SafetyLevel
    summary: str
    ai_model: str | None = None
    generated_at: datetime.datetime
    sections: list[SafetySectionOut]


class ItinerarySummary(CamelModel):
    id: UUID = Field(validation_alias=AliasChoices("id", "itinerary_id"))
    generated_at: datetime.datetime


class SafetyReportSummary(CamelModel):
    id: UUID = Field(validation_alias=AliasChoices("id", "report_id"))
    overall_level: SafetyLevel


class TripBase(CamelModel):
    id: UUID = Field(validation_alias=AliasChoices("id", "trip_id"))
    user_id: UUID
    destination: str
    country: str
    city: str | None = None
    start_date: datetime.date
    end_date: datetime.date
    budget: float
    currency: str
    number_of_travelers: int
    status: TripStatus
    hotel_suggestions: dict[str, Any] | None = None
    flight_suggestions: dict[str, Any] | None = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class TripSummaryOut(TripBase):
    """Trip as listed: artifact summaries only."""

    itinerary: ItinerarySummary | None = None
    safety_report: SafetyReportSummary | None = None


class TripOut(TripBase):
    """Trip with its full itinerary and safety report."""

    itinerary: ItineraryOut | None = None
    safety_report: SafetyReportOut | None = None


# Envelope payloads


class UserData(CamelModel):
    user: UserOut


class AuthData(CamelModel):
    user: UserOut
    token: str


class SafetyProfileData(CamelModel):
    safety_profile: SafetyProfileOut


class TripData(CamelModel):
    trip: TripOut


class TripListData(CamelModel):
    trips: list[TripSummaryOut]


class ItineraryData(CamelModel):
    itinerary: ItineraryOut


class SafetyReportData(CamelModel):
    safety_report: SafetyReportOut


class HotelSuggestionsData(CamelModel):
    hotel_suggestions: dict[str, Any]


class FlightSuggestionsData(CamelModel):
    flight_suggestions: dict[str, Any]
