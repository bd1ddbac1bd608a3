"""Trips API endpoints."""

import datetime
import logging

from fastapi import APIRouter, Depends, status
from pydantic import Field, ValidationInfo, field_validator
from sqlalchemy.orm import Session, selectinload

from backend.app.api.auth import CurrentUser, get_current_user
from backend.app.api.responses import ApiResponse
from backend.app.api.schemas import TripData, TripListData, TripOut, TripSummaryOut
from backend.app.db.models import Itinerary, ItineraryDay, SafetyReport, Trip
from backend.app.db.ownership import get_owned_trip, owned_query
from backend.app.db.session import get_session
from backend.app.errors import NotFoundError, ValidationError
from backend.app.models.common import CamelModel, TripStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])

END_BEFORE_START = "End date must be after start date"
MAX_BUDGET = 1_000_000_000
MAX_TRAVELERS = 100


class CreateTripRequest(CamelModel):
    """Request to create a new trip."""

    destination: str = Field(..., min_length=1, max_length=200)
    country: str = Field(..., min_length=1, max_length=200)
    city: str | None = Field(None, max_length=200)
    start_date: datetime.date
    end_date: datetime.date
    budget: float = Field(..., gt=0, le=MAX_BUDGET)
    currency: str = Field("USD", min_length=3, max_length=3)
    number_of_travelers: int = Field(1, ge=1, le=MAX_TRAVELERS)

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(
        cls, v: datetime.date, info: ValidationInfo
    ) -> datetime.date:
        """Ensure the trip ends after it starts."""
        if "start_date" in info.data and v <= info.data["start_date"]:
            raise ValueError(END_BEFORE_START)
        return v


class UpdateTripRequest(CamelModel):
    """Partial trip update; dates are checked against the stored values."""

    destination: str | None = Field(None, min_length=1, max_length=200)
    country: str | None = Field(None, min_length=1, max_length=200)
    city: str | None = Field(None, max_length=200)
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None
    budget: float | None = Field(None, gt=0, le=MAX_BUDGET)
    currency: str | None = Field(None, min_length=3, max_length=3)
    number_of_travelers: int | None = Field(None, ge=1, le=MAX_TRAVELERS)
    status: TripStatus | None = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str | None) -> str | None:
        return v.upper() if v is not None else v


@router.get("", response_model=ApiResponse[TripListData])
def list_trips(
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[TripListData]:
    """List the current user's trips, newest first, with artifact summaries."""
    stmt = (
        owned_query(session, Trip, current_user.user_id)
        .options(selectinload(Trip.itinerary), selectinload(Trip.safety_report))
        .order_by(Trip.created_at.desc())
    )
    trips = session.execute(stmt).scalars().all()
    return ApiResponse(
        data=TripListData(trips=[TripSummaryOut.model_validate(t) for t in trips])
    )


@router.post(
    "", response_model=ApiResponse[TripData], status_code=status.HTTP_201_CREATED
)
def create_trip(
    request: CreateTripRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[TripData]:
    """Create a trip in DRAFT status."""
    trip = Trip(
        user_id=current_user.user_id,
        status=TripStatus.DRAFT,
        **request.model_dump(),
    )
    session.add(trip)
    session.commit()
    logger.info("Created trip %s for user %s", trip.trip_id, current_user.user_id)

    return ApiResponse(data=TripData(trip=TripOut.model_validate(trip)))


@router.get("/{trip_id}", response_model=ApiResponse[TripData])
def get_trip(
    trip_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[TripData]:
    """Get a trip with its full itinerary and safety report."""
    # Ownership check first so malformed ids are a plain 404
    owned = get_owned_trip(session, current_user.user_id, trip_id)
    stmt = (
        owned_query(session, Trip, current_user.user_id, trip_id=owned.trip_id)
        .options(
            selectinload(Trip.itinerary)
            .selectinload(Itinerary.days)
            .selectinload(ItineraryDay.activities),
            selectinload(Trip.safety_report).selectinload(SafetyReport.sections),
        )
    )
    trip = session.execute(stmt).scalar_one_or_none()
    if trip is None:
        raise NotFoundError("Trip not found")

    return ApiResponse(data=TripData(trip=TripOut.model_validate(trip)))


@router.patch("/{trip_id}", response_model=ApiResponse[TripData])
def update_trip(
    trip_id: str,
    request: UpdateTripRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[TripData]:
    """Update trip fields present in the body."""
    trip = get_owned_trip(session, current_user.user_id, trip_id)
    changes = request.model_dump(exclude_unset=True)

    start = changes.get("start_date") or trip.start_date
    end = changes.get("end_date") or trip.end_date
    if end <= start:
        raise ValidationError(
            errors=[{"field": "endDate", "message": END_BEFORE_START}]
        )

    for field, value in changes.items():
        if value is None and field != "city":
            continue
        setattr(trip, field, value)
    session.commit()

    return ApiResponse(data=TripData(trip=TripOut.model_validate(trip)))


@router.delete("/{trip_id}", response_model=ApiResponse[None])
def delete_trip(
    trip_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[None]:
    """Delete a trip and every artifact generated for it."""
    trip = get_owned_trip(session, current_user.user_id, trip_id)
    session.delete(trip)
    session.commit()
    logger.info("Deleted trip %s", trip_id)

    return ApiResponse(message="Trip deleted successfully")
