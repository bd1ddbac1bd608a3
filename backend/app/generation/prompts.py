"""Prompt construction for trip artifact generation.

Every builder is a pure function of its inputs: no clock reads, no randomness,
dates rendered as ISO strings. Identical inputs give byte-identical prompts.
"""

from __future__ import annotations

import math
from datetime import date

from pydantic import BaseModel, ConfigDict

from backend.app.ai.provider import Message
from backend.app.models.common import ActivityCategory, SafetyLevel
from backend.app.models.generation import (
    ItineraryPreferences,
    TravelerProfile,
    TripContext,
)

PLANNER_SYSTEM_PROMPT = (
    "You are a travel planning assistant. "
    "Always respond with valid JSON only, no extra text."
)
SAFETY_SYSTEM_PROMPT = (
    "You are a travel safety expert. "
    "Always respond with valid JSON only, no extra text."
)
NO_PROFILE_LINE = "No specific safety profile provided. Give general safety advice."

_CATEGORY_LIST = ", ".join(c.value for c in ActivityCategory)
_LEVEL_LIST = ", ".join(level.value for level in SafetyLevel)

_ITINERARY_SCHEMA = """{{
  "days": [
    {{
      "dayNumber": 1,
      "theme": "Arrival & City Exploration",
      "activities": [
        {{
          "name": "Activity Name",
          "description": "Brief description of the activity",
          "category": "SIGHTSEEING",
          "location": "Place name",
          "address": "Full address if known",
          "startTime": "9:00 AM",
          "duration": 120,
          "estimatedCost": 25.00,
          "currency": "{currency}",
          "safetyNotes": "Any relevant safety tips",
          "requiresBooking": false
        }}
      ]
    }}
  ]
}}"""

_SAFETY_SCHEMA = """{
  "overallLevel": "MODERATE",
  "summary": "Brief overall safety assessment for this destination",
  "sections": [
    {
      "title": "General Safety",
      "level": "MODERATE",
      "content": "Detailed safety information for this specific topic",
      "tips": ["Specific tip 1", "Specific tip 2", "Specific tip 3"],
      "resources": ["Emergency: 911", "Tourist Police: +XX XXX XXX"]
    }
  ]
}"""

_HOTEL_SCHEMA = """{{
  "hotels": [
    {{
      "name": "Hotel Name",
      "area": "Neighborhood or district",
      "pricePerNight": 120.00,
      "currency": "{currency}",
      "rating": 4.5,
      "highlights": ["Close to the old town", "Free breakfast"],
      "bookingTip": "Book at least two weeks ahead for the best rate"
    }}
  ],
  "tips": ["General accommodation tip for this destination"]
}}"""

_FLIGHT_SCHEMA = """{{
  "flights": [
    {{
      "airline": "Airline Name",
      "route": "Major hub to destination airport",
      "estimatedPrice": 450.00,
      "currency": "{currency}",
      "duration": "11h 30m",
      "stops": 0,
      "notes": "Typical schedule or fare notes"
    }}
  ],
  "bookingTips": ["Specific booking tip"],
  "bestTimeToBook": "When fares for these dates are usually lowest"
}}"""


class Prompt(BaseModel):
    """A system message plus a user message."""

    model_config = ConfigDict(frozen=True)

    system: str
    user: str

    def messages(self) -> list[Message]:
        return [
            Message(role="system", content=self.system),
            Message(role="user", content=self.user),
        ]


def day_count(start: date, end: date) -> int:
    """Number of itinerary days for a trip: at least one, fractional days round up."""
    return max(1, math.ceil((end - start).days))


def _amount(value: float) -> str:
    return f"{value:.0f}" if float(value).is_integer() else f"{value:.2f}"


def _place(trip: TripContext) -> str:
    place = f"{trip.destination}, {trip.country}"
    if trip.city:
        place += f" ({trip.city})"
    return place


def build_itinerary_prompt(
    trip: TripContext, preferences: ItineraryPreferences | None = None
) -> Prompt:
    """Build the itinerary prompt.

    Args:
        trip: Trip being planned
        preferences: Optional pace, categories and downtime flag

    Returns:
        Prompt asking for a day-by-day JSON itinerary of ``day_count`` days
    """
    days = day_count(trip.start_date, trip.end_date)
    per_day = trip.budget / days

    details = [
        f"- Dates: {trip.start_date.isoformat()} to {trip.end_date.isoformat()}",
        f"- Total Budget: {_amount(trip.budget)} {trip.currency} "
        f"(~{per_day:.0f} {trip.currency}/day)",
        f"- Number of Travelers: {trip.number_of_travelers}",
    ]
    if preferences is not None:
        if preferences.pace is not None:
            details.append(f"- Pace: {preferences.pace.value}")
        if preferences.activities:
            joined = ", ".join(c.value for c in preferences.activities)
            details.append(f"- Preferred Activities: {joined}")
        if preferences.include_downtime:
            details.append("- Include downtime/rest periods")

    user = "\n".join(
        [
            f"You are an expert travel planner. Create a detailed {days}-day itinerary "
            f"for a trip to {_place(trip)}.",
            "",
            "Trip Details:",
            *details,
            "",
            "Create a realistic, day-by-day itinerary. Each day should have 3-5 activities. "
            "Keep total estimated costs within the daily budget.",
            "",
            f"Valid activity categories: {_CATEGORY_LIST}",
            "",
            "Respond with this exact JSON structure:",
            _ITINERARY_SCHEMA.format(currency=trip.currency),
        ]
    )
    return Prompt(system=PLANNER_SYSTEM_PROMPT, user=user)


def _profile_lines(profile: TravelerProfile | None) -> list[str]:
    if profile is None:
        return [NO_PROFILE_LINE]

    lines = []
    if profile.is_lgbtq:
        lines.append("- LGBTQ+ traveler")
    if profile.is_solo_female:
        lines.append("- Solo female traveler")
    if profile.has_accessibility_needs:
        lines.append("- Has accessibility needs")
    if profile.religious_minority:
        lines.append("- Religious minority")
    if profile.dietary_restrictions:
        lines.append(
            f"- Dietary restrictions: {', '.join(profile.dietary_restrictions)}"
        )
    if profile.language_barriers:
        lines.append(f"- Language concerns: {', '.join(profile.language_barriers)}")
    return ["Traveler Safety Profile:", *lines]


def build_safety_prompt(
    trip: TripContext, profile: TravelerProfile | None = None
) -> Prompt:
    """Build the safety report prompt, personalized when a profile exists."""
    user = "\n".join(
        [
            "You are a travel safety expert providing personalized safety reports. "
            f"Create a comprehensive safety report for traveling to {_place(trip)}.",
            "",
            f"Trip Dates: {trip.start_date.isoformat()} to {trip.end_date.isoformat()}",
            f"Number of Travelers: {trip.number_of_travelers}",
            "",
            *_profile_lines(profile),
            "",
            "Create a thorough, honest, and helpful safety report. Be specific about the "
            "destination. Include local emergency contacts and useful resources where possible.",
            "",
            f"Valid safety levels: {_LEVEL_LIST}",
            "",
            "Include relevant sections based on the traveler's profile. Always include "
            '"General Safety" and "Health & Medical" sections. Only include LGBTQ+, Solo '
            "Female, Accessibility, or Religious sections if they are relevant to the "
            "traveler's profile.",
            "",
            "Respond with this exact JSON structure:",
            _SAFETY_SCHEMA,
        ]
    )
    return Prompt(system=SAFETY_SYSTEM_PROMPT, user=user)


def build_hotel_prompt(trip: TripContext) -> Prompt:
    """Build the hotel suggestions prompt with a per-night budget hint."""
    nights = day_count(trip.start_date, trip.end_date)
    per_night = trip.budget / nights

    user = "\n".join(
        [
            "You are an expert travel planner. Suggest 4-6 places to stay "
            f"for a trip to {_place(trip)}.",
            "",
            "Stay Details:",
            f"- Check-in: {trip.start_date.isoformat()}",
            f"- Check-out: {trip.end_date.isoformat()}",
            f"- Nights: {nights}",
            f"- Total Trip Budget: {_amount(trip.budget)} {trip.currency} "
            f"(~{per_night:.0f} {trip.currency}/night for everything)",
            f"- Number of Travelers: {trip.number_of_travelers}",
            "",
            "Suggest a realistic mix of options that fit the budget and party size. "
            "Prefer well-located, safe neighborhoods. Prices are estimates per night for "
            "the whole party.",
            "",
            "Respond with this exact JSON structure:",
            _HOTEL_SCHEMA.format(currency=trip.currency),
        ]
    )
    return Prompt(system=PLANNER_SYSTEM_PROMPT, user=user)


def build_flight_prompt(trip: TripContext) -> Prompt:
    """Build the flight suggestions prompt for a round trip on the trip dates."""
    user = "\n".join(
        [
            "You are an expert travel planner. Suggest 3-5 typical round-trip flight "
            f"options for a trip to {_place(trip)}.",
            "",
            "Flight Details:",
            f"- Outbound: {trip.start_date.isoformat()}",
            f"- Return: {trip.end_date.isoformat()}",
            f"- Number of Travelers: {trip.number_of_travelers}",
            f"- Total Trip Budget: {_amount(trip.budget)} {trip.currency}",
            "",
            "The departure city is not known. Suggest routes from major international "
            "hubs that commonly serve this destination. Prices are estimates per person "
            "in the trip currency.",
            "",
            "Respond with this exact JSON structure:",
            _FLIGHT_SCHEMA.format(currency=trip.currency),
        ]
    )
    return Prompt(system=PLANNER_SYSTEM_PROMPT, user=user)
