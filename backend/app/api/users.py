"""User profile and safety profile endpoints."""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.api.auth import CurrentUser, get_current_user
from backend.app.api.responses import ApiResponse
from backend.app.api.schemas import SafetyProfileData, SafetyProfileOut, UserData, UserOut
from backend.app.db.models import SafetyProfile, User
from backend.app.db.ownership import owned_get
from backend.app.db.session import get_session
from backend.app.errors import AuthError
from backend.app.models.common import BudgetLevel, CamelModel, TravelStyle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


class UpdateProfileRequest(CamelModel):
    """Partial update of the user's own profile."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=40)


class SafetyProfileRequest(CamelModel):
    """Full safety profile; omitted fields fall back to their defaults."""

    is_lgbtq: bool = Field(
        default=False, validation_alias=AliasChoices("isLGBTQ", "isLgbtq", "is_lgbtq")
    )
    is_solo_female: bool = False
    has_accessibility_needs: bool = False
    religious_minority: bool = False
    dietary_restrictions: list[str] = Field(default_factory=list)
    language_barriers: list[str] = Field(default_factory=list)
    preferred_budget_level: BudgetLevel | None = None
    travel_style: TravelStyle | None = None


def _load_user(db: Session, current_user: CurrentUser) -> User:
    user = db.get(User, current_user.user_id)
    if user is None:
        raise AuthError("Invalid token")
    return user


@router.get("/profile", response_model=ApiResponse[UserData])
def get_profile(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ApiResponse[UserData]:
    """Get the current user's profile, including the safety profile."""
    user = _load_user(db, current_user)
    return ApiResponse(data=UserData(user=UserOut.model_validate(user)))


@router.patch("/profile", response_model=ApiResponse[UserData])
def update_profile(
    request: UpdateProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ApiResponse[UserData]:
    """Update name and phone; only fields present in the body change."""
    user = _load_user(db, current_user)
    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    return ApiResponse(data=UserData(user=UserOut.model_validate(user)))


def upsert_safety_profile(
    db: Session, user_id: UUID, values: dict[str, Any]
) -> SafetyProfile:
    """Create or replace the user's single safety profile."""
    profile = owned_get(db, SafetyProfile, user_id)
    if profile is None:
        profile = SafetyProfile(user_id=user_id, **values)
        db.add(profile)
        try:
            db.commit()
            return profile
        except IntegrityError:
            # Created concurrently; fall through to update the winner's row
            db.rollback()
            profile = owned_get(db, SafetyProfile, user_id)

    for field, value in values.items():
        setattr(profile, field, value)
    db.commit()
    return profile


@router.post("/safety-profile", response_model=ApiResponse[SafetyProfileData])
def update_safety_profile(
    request: SafetyProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ApiResponse[SafetyProfileData]:
    """Create or replace the current user's safety profile."""
    profile = upsert_safety_profile(db, current_user.user_id, request.model_dump())
    logger.info("Saved safety profile for user %s", current_user.user_id)
    return ApiResponse(
        data=SafetyProfileData(safety_profile=SafetyProfileOut.model_validate(profile))
    )
