"""Itinerary generation and retrieval endpoints."""

from fastapi import APIRouter, Depends, status
from pydantic import Field
from sqlalchemy.orm import Session

from backend.app.ai.provider import CompletionProvider
from backend.app.api.auth import CurrentUser, get_current_user
from backend.app.api.deps import get_completion_provider
from backend.app.api.responses import ApiResponse
from backend.app.api.schemas import ItineraryData, ItineraryOut
from backend.app.db.session import get_session
from backend.app.generation import generate_itinerary, get_itinerary
from backend.app.models.common import CamelModel
from backend.app.models.generation import ItineraryPreferences

router = APIRouter(prefix="/itineraries", tags=["itineraries"])


class GenerateItineraryRequest(CamelModel):
    """Request to (re)generate a trip itinerary."""

    trip_id: str = Field(..., min_length=1)
    preferences: ItineraryPreferences | None = None


@router.post(
    "/generate",
    response_model=ApiResponse[ItineraryData],
    status_code=status.HTTP_201_CREATED,
)
def generate(
    request: GenerateItineraryRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
    provider: CompletionProvider = Depends(get_completion_provider),
) -> ApiResponse[ItineraryData]:
    """Generate an itinerary, replacing any existing one, and mark the trip PLANNED."""
    itinerary = generate_itinerary(
        session, provider, current_user.user_id, request.trip_id, request.preferences
    )
    return ApiResponse(
        data=ItineraryData(itinerary=ItineraryOut.model_validate(itinerary))
    )


@router.get("/{trip_id}", response_model=ApiResponse[ItineraryData])
def read(
    trip_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[ItineraryData]:
    """Get the itinerary for a trip."""
    itinerary = get_itinerary(session, current_user.user_id, trip_id)
    return ApiResponse(
        data=ItineraryData(itinerary=ItineraryOut.model_validate(itinerary))
    )
