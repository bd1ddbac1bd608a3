"""Trip ORM model."""

from datetime import date
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

from sqlalchemy import Date, Enum, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base, JSONType
from backend.app.db.mixins import TimestampMixin
from backend.app.models.common import TripStatus

if TYPE_CHECKING:
    from .itinerary import Itinerary
    from .safety_report import SafetyReport
    from .user import User


class Trip(TimestampMixin, Base):
    """Trip table - user-owned root of every generated artifact."""

    __tablename__ = "trip"

    trip_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("user.user_id", ondelete="CASCADE"), nullable=False
    )
    destination: Mapped[str] = mapped_column(Text, nullable=False)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    budget: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    number_of_travelers: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )
    status: Mapped[TripStatus] = mapped_column(
        Enum(TripStatus, name="trip_status"),
        nullable=False,
        default=TripStatus.DRAFT,
    )
    # Opaque AI blobs, overwritten wholesale on regeneration
    hotel_suggestions: Mapped[dict[str, Any] | None] = mapped_column(
        JSONType, nullable=True
    )
    flight_suggestions: Mapped[dict[str, Any] | None] = mapped_column(
        JSONType, nullable=True
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="trips")
    itinerary: Mapped["Itinerary | None"] = relationship(
        "Itinerary",
        back_populates="trip",
        cascade="all, delete-orphan",
        uselist=False,
    )
    safety_report: Mapped["SafetyReport | None"] = relationship(
        "SafetyReport",
        back_populates="trip",
        cascade="all, delete-orphan",
        uselist=False,
    )

    __table_args__ = (Index("idx_trip_user_created", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Trip(trip_id={self.trip_id}, destination={self.destination!r}, user_id={self.user_id})>"
