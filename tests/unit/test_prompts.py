"""Tests for prompt construction."""

from datetime import date

import pytest

from backend.app.generation.prompts import (
    NO_PROFILE_LINE,
    PLANNER_SYSTEM_PROMPT,
    SAFETY_SYSTEM_PROMPT,
    build_flight_prompt,
    build_hotel_prompt,
    build_itinerary_prompt,
    build_safety_prompt,
    day_count,
)
from backend.app.models.common import ActivityCategory, Pace
from backend.app.models.generation import (
    ItineraryPreferences,
    TravelerProfile,
    TripContext,
)


@pytest.fixture
def tokyo():
    return TripContext(
        destination="Tokyo",
        country="Japan",
        city="Shinjuku",
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 5),
        budget=2000.0,
        currency="USD",
        number_of_travelers=2,
    )


class TestDayCount:
    """Trip length used for itinerary size and budget hints."""

    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (date(2025, 6, 1), date(2025, 6, 5), 4),
            (date(2025, 6, 1), date(2025, 6, 2), 1),
            (date(2025, 6, 1), date(2025, 6, 1), 1),
            (date(2025, 6, 5), date(2025, 6, 1), 1),
            (date(2024, 12, 30), date(2025, 1, 6), 7),
        ],
    )
    def test_day_count(self, start, end, expected):
        assert day_count(start, end) == expected


class TestItineraryPrompt:
    """Itinerary prompt content."""

    def test_contains_trip_details(self, tokyo):
        prompt = build_itinerary_prompt(tokyo)

        assert prompt.system == PLANNER_SYSTEM_PROMPT
        assert (
            "Create a detailed 4-day itinerary for a trip to Tokyo, Japan (Shinjuku)."
            in prompt.user
        )
        assert "- Dates: 2025-06-01 to 2025-06-05" in prompt.user
        assert "- Total Budget: 2000 USD (~500 USD/day)" in prompt.user
        assert "- Number of Travelers: 2" in prompt.user
        assert '"currency": "USD"' in prompt.user
        assert "DINING, SIGHTSEEING, ADVENTURE" in prompt.user

    def test_preference_lines_only_when_set(self, tokyo):
        bare = build_itinerary_prompt(tokyo, ItineraryPreferences())
        assert "Pace:" not in bare.user
        assert "Preferred Activities" not in bare.user
        assert "downtime" not in bare.user

        prefs = ItineraryPreferences(
            activities=[ActivityCategory.DINING, ActivityCategory.CULTURAL],
            pace=Pace.relaxed,
            include_downtime=True,
        )
        full = build_itinerary_prompt(tokyo, prefs)
        assert "- Pace: relaxed" in full.user
        assert "- Preferred Activities: DINING, CULTURAL" in full.user
        assert "- Include downtime/rest periods" in full.user

    def test_legacy_pace_key_accepted(self):
        prefs = ItineraryPreferences.model_validate({"pacePreference": "packed"})
        assert prefs.pace is Pace.packed

    def test_deterministic(self, tokyo):
        prefs = ItineraryPreferences(pace=Pace.moderate)
        assert build_itinerary_prompt(tokyo, prefs) == build_itinerary_prompt(tokyo, prefs)

    def test_messages_order(self, tokyo):
        messages = build_itinerary_prompt(tokyo).messages()
        assert [m.role for m in messages] == ["system", "user"]


class TestSafetyPrompt:
    """Safety prompt personalization."""

    def test_without_profile(self, tokyo):
        prompt = build_safety_prompt(tokyo, None)

        assert prompt.system == SAFETY_SYSTEM_PROMPT
        assert NO_PROFILE_LINE in prompt.user
        assert "Traveler Safety Profile" not in prompt.user
        assert '"General Safety" and "Health & Medical"' in prompt.user

    def test_solo_female_vegan(self, tokyo):
        profile = TravelerProfile(is_solo_female=True, dietary_restrictions=["vegan"])
        prompt = build_safety_prompt(tokyo, profile)

        assert "- Solo female traveler" in prompt.user
        assert "- Dietary restrictions: vegan" in prompt.user
        assert "LGBTQ+ traveler" not in prompt.user
        assert "Language concerns" not in prompt.user
        assert NO_PROFILE_LINE not in prompt.user

    def test_all_profile_lines(self, tokyo):
        profile = TravelerProfile(
            is_lgbtq=True,
            is_solo_female=True,
            has_accessibility_needs=True,
            religious_minority=True,
            dietary_restrictions=["halal", "nut allergy"],
            language_barriers=["Japanese"],
        )
        prompt = build_safety_prompt(tokyo, profile)

        for line in (
            "- LGBTQ+ traveler",
            "- Has accessibility needs",
            "- Religious minority",
            "- Dietary restrictions: halal, nut allergy",
            "- Language concerns: Japanese",
        ):
            assert line in prompt.user

    def test_empty_profile_has_header_only(self, tokyo):
        prompt = build_safety_prompt(tokyo, TravelerProfile())
        assert "Traveler Safety Profile:" in prompt.user
        assert NO_PROFILE_LINE not in prompt.user


class TestSuggestionPrompts:
    """Hotel and flight prompts."""

    def test_hotel_budget_per_night(self, tokyo):
        prompt = build_hotel_prompt(tokyo)
        assert "- Nights: 4" in prompt.user
        assert "~500 USD/night" in prompt.user
        assert "- Number of Travelers: 2" in prompt.user
        assert '"hotels"' in prompt.user

    def test_flight_round_trip_dates(self, tokyo):
        prompt = build_flight_prompt(tokyo)
        assert "- Outbound: 2025-06-01" in prompt.user
        assert "- Return: 2025-06-05" in prompt.user
        assert "- Number of Travelers: 2" in prompt.user
        assert '"bestTimeToBook"' in prompt.user

    def test_city_omitted_when_missing(self, tokyo):
        trip = tokyo.model_copy(update={"city": None})
        first_line = build_hotel_prompt(trip).user.splitlines()[0]
        assert first_line.endswith("Tokyo, Japan.")
