"""Safety report and section ORM models."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base, JSONType
from backend.app.db.mixins import utcnow
from backend.app.models.common import SafetyLevel

if TYPE_CHECKING:
    from .trip import Trip


class SafetyReport(Base):
    """Safety report table - at most one per trip."""

    __tablename__ = "safety_report"

    report_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    trip_id: Mapped[UUID] = mapped_column(
        ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    overall_level: Mapped[SafetyLevel] = mapped_column(
        Enum(SafetyLevel, name="safety_level"), nullable=False
    )
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    ai_model: Mapped[str | None] = mapped_column(Text, nullable=True)
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    trip: Mapped["Trip"] = relationship("Trip", back_populates="safety_report")
    sections: Mapped[list["SafetySection"]] = relationship(
        "SafetySection",
        back_populates="report",
        cascade="all, delete-orphan",
        order_by="SafetySection.order",
    )

    __table_args__ = (UniqueConstraint("trip_id", name="uq_safety_report_trip"),)

    def __repr__(self) -> str:
        return f"<SafetyReport(report_id={self.report_id}, trip_id={self.trip_id})>"


class SafetySection(Base):
    """One topic of a safety report."""

    __tablename__ = "safety_section"

    section_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    report_id: Mapped[UUID] = mapped_column(
        ForeignKey("safety_report.report_id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    level: Mapped[SafetyLevel] = mapped_column(
        Enum(SafetyLevel, name="safety_level"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tips: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    resources: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    report: Mapped["SafetyReport"] = relationship("SafetyReport", back_populates="sections")

    __table_args__ = (UniqueConstraint("report_id", "order", name="uq_safety_section_order"),)
