"""Itinerary, day and activity ORM models."""

import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base
from backend.app.db.mixins import utcnow
from backend.app.models.common import ActivityCategory

if TYPE_CHECKING:
    from .trip import Trip


class Itinerary(Base):
    """Itinerary table - at most one per trip."""

    __tablename__ = "itinerary"

    itinerary_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    trip_id: Mapped[UUID] = mapped_column(
        ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    ai_model: Mapped[str | None] = mapped_column(Text, nullable=True)
    generated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    trip: Mapped["Trip"] = relationship("Trip", back_populates="itinerary")
    days: Mapped[list["ItineraryDay"]] = relationship(
        "ItineraryDay",
        back_populates="itinerary",
        cascade="all, delete-orphan",
        order_by="ItineraryDay.day_number",
    )

    # The unique trip_id is the only guard against concurrent regeneration
    __table_args__ = (UniqueConstraint("trip_id", name="uq_itinerary_trip"),)

    def __repr__(self) -> str:
        return f"<Itinerary(itinerary_id={self.itinerary_id}, trip_id={self.trip_id})>"


class ItineraryDay(Base):
    """One calendar day of an itinerary."""

    __tablename__ = "itinerary_day"

    day_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    itinerary_id: Mapped[UUID] = mapped_column(
        ForeignKey("itinerary.itinerary_id", ondelete="CASCADE"), nullable=False
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    theme: Mapped[str | None] = mapped_column(Text, nullable=True)

    itinerary: Mapped["Itinerary"] = relationship("Itinerary", back_populates="days")
    activities: Mapped[list["Activity"]] = relationship(
        "Activity",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="Activity.order",
    )

    __table_args__ = (
        UniqueConstraint("itinerary_id", "day_number", name="uq_itinerary_day_number"),
    )


class Activity(Base):
    """A single scheduled activity within a day."""

    __tablename__ = "activity"

    activity_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    day_id: Mapped[UUID] = mapped_column(
        ForeignKey("itinerary_day.day_id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[ActivityCategory] = mapped_column(
        Enum(ActivityCategory, name="activity_category"), nullable=False
    )
    location: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_time: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    estimated_cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    safety_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    requires_booking: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    day: Mapped["ItineraryDay"] = relationship("ItineraryDay", back_populates="activities")

    __table_args__ = (UniqueConstraint("day_id", "order", name="uq_activity_day_order"),)
