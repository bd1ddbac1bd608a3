"""Ownership enforcement helpers for user-scoped queries.

Every trip-derived resource is reachable only through a trip owned by the
requesting user. These helpers make that filter explicit instead of relying on
event hooks, and collapse "missing" and "someone else's" into the same result.
"""

from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from backend.app.db.models.trip import Trip
from backend.app.errors import NotFoundError

# Type variable for ORM models
T = TypeVar("T")


def owned_query(
    session: Session, model: type[T], user_id: UUID, **filters: Any
) -> Select[tuple[T]]:
    """
    Create a user-scoped query for a model.

    Args:
        session: SQLAlchemy session
        model: ORM model class (must have user_id column)
        user_id: Owning user to scope the query to
        **filters: Additional filter conditions (column=value)

    Returns:
        SQLAlchemy Select statement with the user_id filter applied

    Raises:
        AttributeError: If model doesn't have a user_id column or a filter column
    """
    if not hasattr(model, "user_id"):
        raise AttributeError(f"Model {model.__name__} does not have user_id column")

    stmt = select(model).where(model.user_id == user_id)

    for key, value in filters.items():
        if not hasattr(model, key):
            raise AttributeError(f"Model {model.__name__} does not have {key} column")
        stmt = stmt.where(getattr(model, key) == value)

    return stmt


def owned_get(
    session: Session, model: type[T], user_id: UUID, **filters: Any
) -> T | None:
    """Get a single user-scoped record, or None."""
    stmt = owned_query(session, model, user_id, **filters)
    return session.execute(stmt).scalar_one_or_none()


def _coerce_uuid(value: UUID | str) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def get_owned_trip(session: Session, user_id: UUID, trip_id: UUID | str) -> Trip:
    """
    Load a trip that belongs to the given user.

    Args:
        session: SQLAlchemy session
        user_id: Authenticated user's ID
        trip_id: Trip ID, as a UUID or its string form

    Returns:
        The owned Trip

    Raises:
        NotFoundError: If the trip does not exist, belongs to another user,
            or trip_id is not a well-formed UUID
    """
    parsed = _coerce_uuid(trip_id)
    trip = None
    if parsed is not None:
        trip = owned_get(session, Trip, user_id, trip_id=parsed)
    if trip is None:
        raise NotFoundError("Trip not found")
    return trip
