"""Generation workflow: ownership, prompt, provider call, normalize, persist.

Every operation resolves the trip through the ownership guard first, so a trip
that is missing and a trip owned by someone else are indistinguishable. Nothing
is written until the provider answered and the answer normalized cleanly.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from backend.app.ai.provider import CompletionParams, CompletionProvider
from backend.app.config import get_settings
from backend.app.db.models import (
    Itinerary,
    ItineraryDay,
    SafetyProfile,
    SafetyReport,
)
from backend.app.db.ownership import get_owned_trip, owned_get
from backend.app.errors import NotFoundError, ProviderResponseError
from backend.app.generation import prompts
from backend.app.generation.normalize import (
    ParseResult,
    parse_itinerary,
    parse_safety_report,
    parse_suggestions,
)
from backend.app.generation.persistence import (
    replace_itinerary,
    replace_safety_report,
    store_suggestions,
)
from backend.app.models.generation import (
    ItineraryPreferences,
    TravelerProfile,
    TripContext,
)

logger = logging.getLogger(__name__)

ITINERARY_TEMPERATURE = 0.8
SAFETY_REPORT_TEMPERATURE = 0.7
SUGGESTIONS_TEMPERATURE = 0.8


def _params(temperature: float) -> CompletionParams:
    return CompletionParams(
        temperature=temperature, max_tokens=get_settings().ai_max_tokens
    )


def _unwrap(result: ParseResult[Any], artifact: str, trip_id: UUID) -> Any:
    if not result.ok:
        logger.warning(
            "Discarding %s response for trip %s: %s (%s)",
            artifact,
            trip_id,
            result.error_kind,
            result.detail,
        )
        raise ProviderResponseError()
    return result.value


def _complete(
    provider: CompletionProvider,
    prompt: prompts.Prompt,
    temperature: float,
    artifact: str,
    trip_id: UUID,
) -> str:
    try:
        return provider.complete(prompt.messages(), _params(temperature))
    except Exception as e:
        logger.warning("Provider call for %s on trip %s failed: %s", artifact, trip_id, e)
        raise


def generate_itinerary(
    session: Session,
    provider: CompletionProvider,
    user_id: UUID,
    trip_id: UUID | str,
    preferences: ItineraryPreferences | None = None,
) -> Itinerary:
    """
    Generate (or regenerate) the itinerary for an owned trip.

    Args:
        session: SQLAlchemy session
        provider: Completion provider
        user_id: Authenticated user's ID
        trip_id: Target trip
        preferences: Optional pace/category/downtime hints

    Returns:
        The persisted Itinerary; the trip is now PLANNED

    Raises:
        NotFoundError: Trip missing or not owned by the user
        ProviderUnavailableError: Provider failed, or returned unusable output
        GenerationConflictError: A concurrent regeneration committed first
    """
    trip = get_owned_trip(session, user_id, trip_id)
    logger.info("Generating itinerary for trip %s", trip.trip_id)

    context = TripContext.model_validate(trip)
    prompt = prompts.build_itinerary_prompt(context, preferences)
    text = _complete(provider, prompt, ITINERARY_TEMPERATURE, "itinerary", trip.trip_id)
    normalized = _unwrap(
        parse_itinerary(text, trip.start_date, trip.end_date, trip.currency),
        "itinerary",
        trip.trip_id,
    )

    itinerary = replace_itinerary(session, trip, normalized, provider.model_name)
    logger.info(
        "Stored itinerary %s (%d days) for trip %s",
        itinerary.itinerary_id,
        len(normalized.days),
        trip.trip_id,
    )
    return itinerary


def generate_safety_report(
    session: Session,
    provider: CompletionProvider,
    user_id: UUID,
    trip_id: UUID | str,
) -> SafetyReport:
    """Generate (or regenerate) the safety report, personalized by the user's profile."""
    trip = get_owned_trip(session, user_id, trip_id)
    logger.info("Generating safety report for trip %s", trip.trip_id)

    stored_profile = owned_get(session, SafetyProfile, user_id)
    profile = (
        TravelerProfile.model_validate(stored_profile)
        if stored_profile is not None
        else None
    )

    prompt = prompts.build_safety_prompt(TripContext.model_validate(trip), profile)
    text = _complete(
        provider, prompt, SAFETY_REPORT_TEMPERATURE, "safety report", trip.trip_id
    )
    normalized = _unwrap(parse_safety_report(text), "safety report", trip.trip_id)

    report = replace_safety_report(session, trip, normalized, provider.model_name)
    logger.info(
        "Stored safety report %s (%s, %d sections) for trip %s",
        report.report_id,
        report.overall_level.value,
        len(normalized.sections),
        trip.trip_id,
    )
    return report


def _generate_suggestions(
    session: Session,
    provider: CompletionProvider,
    user_id: UUID,
    trip_id: UUID | str,
    kind: str,
) -> dict[str, Any]:
    trip = get_owned_trip(session, user_id, trip_id)
    artifact = f"{kind[:-1]} suggestions"
    logger.info("Generating %s for trip %s", artifact, trip.trip_id)

    context = TripContext.model_validate(trip)
    if kind == "hotels":
        prompt = prompts.build_hotel_prompt(context)
    else:
        prompt = prompts.build_flight_prompt(context)

    text = _complete(provider, prompt, SUGGESTIONS_TEMPERATURE, artifact, trip.trip_id)
    blob = _unwrap(parse_suggestions(text), artifact, trip.trip_id)

    stored = store_suggestions(session, trip, kind, blob)
    logger.info("Stored %s for trip %s", artifact, trip.trip_id)
    return stored


def generate_hotel_suggestions(
    session: Session, provider: CompletionProvider, user_id: UUID, trip_id: UUID | str
) -> dict[str, Any]:
    """Generate hotel suggestions and overwrite the trip's stored blob."""
    return _generate_suggestions(session, provider, user_id, trip_id, "hotels")


def generate_flight_suggestions(
    session: Session, provider: CompletionProvider, user_id: UUID, trip_id: UUID | str
) -> dict[str, Any]:
    """Generate flight suggestions and overwrite the trip's stored blob."""
    return _generate_suggestions(session, provider, user_id, trip_id, "flights")


def get_itinerary(session: Session, user_id: UUID, trip_id: UUID | str) -> Itinerary:
    """Load the itinerary of an owned trip with days and activities."""
    trip = get_owned_trip(session, user_id, trip_id)
    stmt = (
        select(Itinerary)
        .where(Itinerary.trip_id == trip.trip_id)
        .options(selectinload(Itinerary.days).selectinload(ItineraryDay.activities))
    )
    itinerary = session.execute(stmt).scalar_one_or_none()
    if itinerary is None:
        raise NotFoundError("Itinerary not found. Generate one first.")
    return itinerary


def get_safety_report(
    session: Session, user_id: UUID, trip_id: UUID | str
) -> SafetyReport:
    """Load the safety report of an owned trip with its sections."""
    trip = get_owned_trip(session, user_id, trip_id)
    stmt = (
        select(SafetyReport)
        .where(SafetyReport.trip_id == trip.trip_id)
        .options(selectinload(SafetyReport.sections))
    )
    report = session.execute(stmt).scalar_one_or_none()
    if report is None:
        raise NotFoundError("Safety report not found. Generate one first.")
    return report


def get_hotel_suggestions(
    session: Session, user_id: UUID, trip_id: UUID | str
) -> dict[str, Any]:
    trip = get_owned_trip(session, user_id, trip_id)
    if not trip.hotel_suggestions:
        raise NotFoundError("Hotel suggestions not found. Generate them first.")
    return trip.hotel_suggestions


def get_flight_suggestions(
    session: Session, user_id: UUID, trip_id: UUID | str
) -> dict[str, Any]:
    trip = get_owned_trip(session, user_id, trip_id)
    if not trip.flight_suggestions:
        raise NotFoundError("Flight suggestions not found. Generate them first.")
    return trip.flight_suggestions
