"""Safety profile ORM model."""

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import Boolean, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base, JSONType
from backend.app.db.mixins import TimestampMixin
from backend.app.models.common import BudgetLevel, TravelStyle

if TYPE_CHECKING:
    from .user import User


class SafetyProfile(TimestampMixin, Base):
    """Per-user traveler profile used to personalize safety reports."""

    __tablename__ = "safety_profile"

    profile_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("user.user_id", ondelete="CASCADE"), nullable=False
    )
    is_lgbtq: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_solo_female: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    has_accessibility_needs: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    religious_minority: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    dietary_restrictions: Mapped[list[str]] = mapped_column(
        JSONType, nullable=False, default=list
    )
    language_barriers: Mapped[list[str]] = mapped_column(
        JSONType, nullable=False, default=list
    )
    preferred_budget_level: Mapped[BudgetLevel | None] = mapped_column(
        Enum(BudgetLevel, name="budget_level"), nullable=True
    )
    travel_style: Mapped[TravelStyle | None] = mapped_column(
        Enum(TravelStyle, name="travel_style"), nullable=True
    )

    user: Mapped["User"] = relationship("User", back_populates="safety_profile")

    __table_args__ = (UniqueConstraint("user_id", name="uq_safety_profile_user"),)

    def __repr__(self) -> str:
        return f"<SafetyProfile(profile_id={self.profile_id}, user_id={self.user_id})>"
