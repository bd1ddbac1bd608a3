"""Replace-and-persist transitions for generated trip artifacts.

Each artifact kind is either absent or present for a trip. Generating moves it
to present in a single transaction: the old row (if any) is deleted and
flushed, the new one is inserted, and the transaction commits. Any failure
rolls back and leaves the previous artifact in place.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.db.models import (
    Activity,
    Itinerary,
    ItineraryDay,
    SafetyReport,
    SafetySection,
    Trip,
)
from backend.app.errors import GenerationConflictError
from backend.app.models.common import TripStatus
from backend.app.models.generation import NormalizedItinerary, NormalizedSafetyReport

logger = logging.getLogger(__name__)

SuggestionKind = Literal["hotels", "flights"]

_SUGGESTION_COLUMNS: dict[str, str] = {
    "hotels": "hotel_suggestions",
    "flights": "flight_suggestions",
}


def _commit(session: Session, trip: Trip, artifact: str) -> None:
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(
            "Concurrent %s generation for trip %s lost the race", artifact, trip.trip_id
        )
        raise GenerationConflictError() from e


def _delete_existing(session: Session, trip: Trip, attribute: str) -> None:
    existing = getattr(trip, attribute)
    if existing is not None:
        session.delete(existing)
        # Deletes must hit the database before the replacement insert
        session.flush()
    session.expire(trip, [attribute])


def replace_itinerary(
    session: Session, trip: Trip, itinerary: NormalizedItinerary, ai_model: str | None
) -> Itinerary:
    """
    Replace the trip's itinerary and mark the trip PLANNED.

    Args:
        session: SQLAlchemy session (the caller's unit of work)
        trip: Owned trip
        itinerary: Normalized itinerary, one entry per trip day
        ai_model: Model name recorded on the row

    Returns:
        The newly persisted Itinerary

    Raises:
        GenerationConflictError: A concurrent generation committed first
    """
    try:
        _delete_existing(session, trip, "itinerary")

        row = Itinerary(
            trip_id=trip.trip_id,
            ai_model=ai_model,
            days=[
                ItineraryDay(
                    day_number=day.day_number,
                    date=day.date,
                    theme=day.theme,
                    activities=[
                        Activity(order=order, **activity.model_dump())
                        for order, activity in enumerate(day.activities)
                    ],
                )
                for day in itinerary.days
            ],
        )
        session.add(row)
        trip.status = TripStatus.PLANNED
        _commit(session, trip, "itinerary")
    except GenerationConflictError:
        raise
    except Exception:
        session.rollback()
        raise

    return row


def replace_safety_report(
    session: Session, trip: Trip, report: NormalizedSafetyReport, ai_model: str | None
) -> SafetyReport:
    """Replace the trip's safety report. Same transaction rules as itineraries."""
    try:
        _delete_existing(session, trip, "safety_report")

        row = SafetyReport(
            trip_id=trip.trip_id,
            overall_level=report.overall_level,
            summary=report.summary,
            ai_model=ai_model,
            sections=[
                SafetySection(
                    order=order,
                    title=section.title,
                    level=section.level,
                    content=section.content,
                    tips=list(section.tips),
                    resources=list(section.resources),
                )
                for order, section in enumerate(report.sections)
            ],
        )
        session.add(row)
        _commit(session, trip, "safety report")
    except GenerationConflictError:
        raise
    except Exception:
        session.rollback()
        raise

    return row


def store_suggestions(
    session: Session, trip: Trip, kind: SuggestionKind, blob: dict[str, Any]
) -> dict[str, Any]:
    """Overwrite the trip's hotel or flight suggestions blob."""
    column = _SUGGESTION_COLUMNS[kind]
    try:
        setattr(trip, column, blob)
        session.commit()
    except Exception:
        session.rollback()
        raise
    return getattr(trip, column)
