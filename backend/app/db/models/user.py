"""User ORM model."""

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base
from backend.app.db.mixins import TimestampMixin

if TYPE_CHECKING:
    from .safety_profile import SafetyProfile
    from .trip import Trip


class User(TimestampMixin, Base):
    """User table - owner of trips and of at most one safety profile."""

    __tablename__ = "user"

    user_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(
        Text, nullable=False
    )  # Argon2id
    first_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    trips: Mapped[list["Trip"]] = relationship(
        "Trip", back_populates="user", cascade="all, delete-orphan"
    )
    safety_profile: Mapped["SafetyProfile | None"] = relationship(
        "SafetyProfile",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )

    __table_args__ = (Index("idx_user_email", "email"),)

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email={self.email!r})>"
