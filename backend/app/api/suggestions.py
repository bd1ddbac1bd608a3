"""Hotel and flight suggestion endpoints."""

from fastapi import APIRouter, Depends, status
from pydantic import Field
from sqlalchemy.orm import Session

from backend.app.ai.provider import CompletionProvider
from backend.app.api.auth import CurrentUser, get_current_user
from backend.app.api.deps import get_completion_provider
from backend.app.api.responses import ApiResponse
from backend.app.api.schemas import FlightSuggestionsData, HotelSuggestionsData
from backend.app.db.session import get_session
from backend.app.generation import (
    generate_flight_suggestions,
    generate_hotel_suggestions,
    get_flight_suggestions,
    get_hotel_suggestions,
)
from backend.app.models.common import CamelModel

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


class GenerateSuggestionsRequest(CamelModel):
    trip_id: str = Field(..., min_length=1)


@router.post(
    "/hotels/generate",
    response_model=ApiResponse[HotelSuggestionsData],
    status_code=status.HTTP_201_CREATED,
)
def generate_hotels(
    request: GenerateSuggestionsRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
    provider: CompletionProvider = Depends(get_completion_provider),
) -> ApiResponse[HotelSuggestionsData]:
    """Generate hotel suggestions, overwriting previous ones."""
    blob = generate_hotel_suggestions(
        session, provider, current_user.user_id, request.trip_id
    )
    return ApiResponse(data=HotelSuggestionsData(hotel_suggestions=blob))


@router.post(
    "/flights/generate",
    response_model=ApiResponse[FlightSuggestionsData],
    status_code=status.HTTP_201_CREATED,
)
def generate_flights(
    request: GenerateSuggestionsRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
    provider: CompletionProvider = Depends(get_completion_provider),
) -> ApiResponse[FlightSuggestionsData]:
    """Generate flight suggestions, overwriting previous ones."""
    blob = generate_flight_suggestions(
        session, provider, current_user.user_id, request.trip_id
    )
    return ApiResponse(data=FlightSuggestionsData(flight_suggestions=blob))


@router.get("/hotels/{trip_id}", response_model=ApiResponse[HotelSuggestionsData])
def read_hotels(
    trip_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[HotelSuggestionsData]:
    blob = get_hotel_suggestions(session, current_user.user_id, trip_id)
    return ApiResponse(data=HotelSuggestionsData(hotel_suggestions=blob))


@router.get("/flights/{trip_id}", response_model=ApiResponse[FlightSuggestionsData])
def read_flights(
    trip_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[FlightSuggestionsData]:
    blob = get_flight_suggestions(session, current_user.user_id, trip_id)
    return ApiResponse(data=FlightSuggestionsData(flight_suggestions=blob))
