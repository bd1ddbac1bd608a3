"""Tests for the generation workflow against a real (SQLite) session."""

import json
import logging
from datetime import date

import pytest
from sqlalchemy import func, select

from backend.app.db.models import (
    Activity,
    Itinerary,
    ItineraryDay,
    SafetyProfile,
    SafetyReport,
    SafetySection,
)
from backend.app.errors import (
    GenerationConflictError,
    NotFoundError,
    ProviderRateLimitedError,
    ProviderResponseError,
    ProviderUnavailableError,
)
from backend.app.generation import persistence, workflow
from backend.app.models.common import ActivityCategory, Pace, SafetyLevel, TripStatus
from backend.app.models.generation import ItineraryPreferences


def itinerary_text(themes, activities_per_day=2):
    return json.dumps(
        {
            "days": [
                {
                    "dayNumber": index + 1,
                    "theme": theme,
                    "activities": [
                        {
                            "name": f"{theme} stop {n}",
                            "description": "A stop",
                            "category": "SIGHTSEEING",
                            "location": "Tokyo",
                            "duration": 60,
                            "estimatedCost": 10,
                            "currency": "USD",
                        }
                        for n in range(activities_per_day)
                    ],
                }
                for index, theme in enumerate(themes)
            ]
        }
    )


def safety_text(overall="LOW", titles=("General Safety", "Health & Medical")):
    return json.dumps(
        {
            "overallLevel": overall,
            "summary": "Generally safe.",
            "sections": [
                {"title": t, "level": "LOW", "content": "...", "tips": ["tip"]}
                for t in titles
            ],
        }
    )


def count(session, model):
    return session.execute(select(func.count()).select_from(model)).scalar_one()


class TestGenerateItinerary:
    def test_tokyo_scenario(self, test_session, fake_provider, test_user, test_trip):
        fake_provider.queue(itinerary_text(["Arrival", "Temples", "Food", "Departure"]))

        itinerary = workflow.generate_itinerary(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        assert [d.date for d in itinerary.days] == [
            date(2025, 6, 1),
            date(2025, 6, 2),
            date(2025, 6, 3),
            date(2025, 6, 4),
        ]
        assert [d.day_number for d in itinerary.days] == [1, 2, 3, 4]
        assert [a.order for a in itinerary.days[0].activities] == [0, 1]
        assert itinerary.ai_model == "fake-model"
        test_session.refresh(test_trip)
        assert test_trip.status is TripStatus.PLANNED

    def test_params_and_preferences(
        self, test_session, fake_provider, test_user, test_trip
    ):
        fake_provider.queue(itinerary_text(["A"]))
        prefs = ItineraryPreferences(
            activities=[ActivityCategory.NIGHTLIFE], pace=Pace.packed
        )

        workflow.generate_itinerary(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id, prefs
        )

        _, params = fake_provider.calls[0]
        assert params.temperature == workflow.ITINERARY_TEMPERATURE == 0.8
        assert params.json_mode is True
        assert "- Pace: packed" in fake_provider.last_user_prompt
        assert "- Preferred Activities: NIGHTLIFE" in fake_provider.last_user_prompt

    def test_regeneration_replaces(
        self, test_session, fake_provider, test_user, test_trip
    ):
        fake_provider.queue(
            itinerary_text(["Old"] * 4, activities_per_day=3),
            itinerary_text(["New"] * 4, activities_per_day=1),
        )
        first = workflow.generate_itinerary(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )
        first_id = first.itinerary_id

        second = workflow.generate_itinerary(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        assert second.itinerary_id != first_id
        assert count(test_session, Itinerary) == 1
        assert count(test_session, ItineraryDay) == 4
        assert count(test_session, Activity) == 4
        themes = test_session.execute(select(ItineraryDay.theme)).scalars().all()
        assert set(themes) == {"New"}

    def test_foreign_trip_not_found_without_provider_call(
        self, test_session, fake_provider, other_user, test_trip
    ):
        with pytest.raises(NotFoundError, match="Trip not found"):
            workflow.generate_itinerary(
                test_session, fake_provider, other_user.user_id, test_trip.trip_id
            )
        assert fake_provider.calls == []

    def test_malformed_response_keeps_existing(
        self, test_session, fake_provider, test_user, test_trip, caplog
    ):
        fake_provider.queue(itinerary_text(["Keep"] * 4), "not json at all")
        original = workflow.generate_itinerary(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        with caplog.at_level(logging.WARNING, logger="backend.app.generation.workflow"):
            with pytest.raises(ProviderResponseError):
                workflow.generate_itinerary(
                    test_session, fake_provider, test_user.user_id, test_trip.trip_id
                )

        stored = workflow.get_itinerary(test_session, test_user.user_id, test_trip.trip_id)
        assert stored.itinerary_id == original.itinerary_id
        assert {d.theme for d in stored.days} == {"Keep"}
        assert "invalid_json" in caplog.text

    def test_provider_failure_writes_nothing(
        self, test_session, fake_provider, test_user, test_trip
    ):
        fake_provider.queue(ProviderRateLimitedError())

        with pytest.raises(ProviderRateLimitedError):
            workflow.generate_itinerary(
                test_session, fake_provider, test_user.user_id, test_trip.trip_id
            )

        assert count(test_session, Itinerary) == 0
        test_session.refresh(test_trip)
        assert test_trip.status is TripStatus.DRAFT

    def test_oversized_numbers_are_stored_as_null(
        self, test_session, fake_provider, test_user, test_trip
    ):
        fake_provider.queue(
            json.dumps(
                {
                    "days": [
                        {
                            "activities": [
                                {
                                    "name": "x",
                                    "category": "DINING",
                                    "location": "y",
                                    "duration": 10**25,
                                    "estimatedCost": 1e30,
                                }
                            ]
                        }
                    ]
                }
            )
        )

        itinerary = workflow.generate_itinerary(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        activity = itinerary.days[0].activities[0]
        assert activity.duration is None
        assert activity.estimated_cost is None
        assert count(test_session, Activity) == 1

    def test_concurrent_insert_is_conflict(
        self, test_session, fake_provider, test_user, test_trip, monkeypatch
    ):
        fake_provider.queue(itinerary_text(["First"] * 4), itinerary_text(["Race"] * 4))
        workflow.generate_itinerary(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        # Simulate a racing request that did not see the existing row
        monkeypatch.setattr(persistence, "_delete_existing", lambda *args: None)

        with pytest.raises(GenerationConflictError) as exc_info:
            workflow.generate_itinerary(
                test_session, fake_provider, test_user.user_id, test_trip.trip_id
            )

        assert exc_info.value.status_code == 409
        assert exc_info.value.retryable is True
        assert count(test_session, Itinerary) == 1
        themes = test_session.execute(select(ItineraryDay.theme)).scalars().all()
        assert set(themes) == {"First"}

    def test_get_before_generate(self, test_session, test_user, test_trip):
        with pytest.raises(NotFoundError, match="Generate one first"):
            workflow.get_itinerary(test_session, test_user.user_id, test_trip.trip_id)


class TestGenerateSafetyReport:
    def test_without_profile(self, test_session, fake_provider, test_user, test_trip):
        fake_provider.queue(safety_text(overall="GUARDED"))

        report = workflow.generate_safety_report(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        assert report.overall_level is SafetyLevel.MODERATE
        assert [s.title for s in report.sections] == ["General Safety", "Health & Medical"]
        assert [s.order for s in report.sections] == [0, 1]
        assert "No specific safety profile provided" in fake_provider.last_user_prompt
        _, params = fake_provider.calls[0]
        assert params.temperature == 0.7

    def test_solo_female_vegan_profile(
        self, test_session, fake_provider, test_user, test_trip
    ):
        test_session.add(
            SafetyProfile(
                user_id=test_user.user_id,
                is_solo_female=True,
                dietary_restrictions=["vegan"],
            )
        )
        test_session.commit()
        fake_provider.queue(
            safety_text(titles=("General Safety", "Health & Medical", "Solo Female Travel"))
        )

        report = workflow.generate_safety_report(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        prompt = fake_provider.last_user_prompt
        assert "- Solo female traveler" in prompt
        assert "- Dietary restrictions: vegan" in prompt
        assert "Solo Female Travel" in [s.title for s in report.sections]

    def test_regeneration_replaces_sections(
        self, test_session, fake_provider, test_user, test_trip
    ):
        fake_provider.queue(
            safety_text(titles=("A", "B", "C")),
            safety_text(overall="HIGH", titles=("D",)),
        )
        workflow.generate_safety_report(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )
        report = workflow.generate_safety_report(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        assert report.overall_level is SafetyLevel.HIGH
        assert count(test_session, SafetyReport) == 1
        assert count(test_session, SafetySection) == 1

    def test_structurally_invalid(self, test_session, fake_provider, test_user, test_trip):
        fake_provider.queue('{"overallLevel": "LOW", "sections": "none"}')

        with pytest.raises(ProviderResponseError) as exc_info:
            workflow.generate_safety_report(
                test_session, fake_provider, test_user.user_id, test_trip.trip_id
            )

        assert exc_info.value.status_code == 503
        assert count(test_session, SafetyReport) == 0

    def test_get_before_generate(self, test_session, test_user, test_trip):
        with pytest.raises(NotFoundError, match="Safety report not found"):
            workflow.get_safety_report(test_session, test_user.user_id, test_trip.trip_id)


class TestSuggestions:
    def test_hotels_overwrite(self, test_session, fake_provider, test_user, test_trip):
        fake_provider.queue(
            json.dumps({"hotels": [{"name": "Old Inn"}], "tips": []}),
            json.dumps({"hotels": [{"name": "Park Hyatt"}], "tips": ["Book early"]}),
        )

        workflow.generate_hotel_suggestions(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )
        blob = workflow.generate_hotel_suggestions(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        assert blob["hotels"][0]["name"] == "Park Hyatt"
        stored = workflow.get_hotel_suggestions(
            test_session, test_user.user_id, test_trip.trip_id
        )
        assert stored == blob
        _, params = fake_provider.calls[0]
        assert params.temperature == workflow.SUGGESTIONS_TEMPERATURE

    def test_flights(self, test_session, fake_provider, test_user, test_trip):
        fake_provider.queue(json.dumps({"flights": [], "bookingTips": ["Tuesday"]}))

        blob = workflow.generate_flight_suggestions(
            test_session, fake_provider, test_user.user_id, test_trip.trip_id
        )

        assert blob == {"flights": [], "bookingTips": ["Tuesday"]}
        assert "- Outbound: 2025-06-01" in fake_provider.last_user_prompt
        assert workflow.get_flight_suggestions(
            test_session, test_user.user_id, test_trip.trip_id
        ) == blob

    def test_array_response_rejected(
        self, test_session, fake_provider, test_user, test_trip
    ):
        fake_provider.queue('[{"name": "Park Hyatt"}]')

        with pytest.raises(ProviderResponseError):
            workflow.generate_hotel_suggestions(
                test_session, fake_provider, test_user.user_id, test_trip.trip_id
            )
        test_session.refresh(test_trip)
        assert test_trip.hotel_suggestions is None

    def test_provider_unavailable(self, test_session, fake_provider, test_user, test_trip):
        fake_provider.queue(ProviderUnavailableError())

        with pytest.raises(ProviderUnavailableError):
            workflow.generate_flight_suggestions(
                test_session, fake_provider, test_user.user_id, test_trip.trip_id
            )

    def test_get_before_generate(self, test_session, test_user, test_trip):
        with pytest.raises(NotFoundError, match="Hotel suggestions not found"):
            workflow.get_hotel_suggestions(test_session, test_user.user_id, test_trip.trip_id)
        with pytest.raises(NotFoundError, match="Flight suggestions not found"):
            workflow.get_flight_suggestions(test_session, test_user.user_id, test_trip.trip_id)
