"""Safety report generation and retrieval endpoints."""

from fastapi import APIRouter, Depends, status
from pydantic import Field
from sqlalchemy.orm import Session

from backend.app.ai.provider import CompletionProvider
from backend.app.api.auth import CurrentUser, get_current_user
from backend.app.api.deps import get_completion_provider
from backend.app.api.responses import ApiResponse
from backend.app.api.schemas import SafetyReportData, SafetyReportOut
from backend.app.db.session import get_session
from backend.app.generation import generate_safety_report, get_safety_report
from backend.app.models.common import CamelModel

router = APIRouter(prefix="/safety", tags=["safety"])


class GenerateSafetyReportRequest(CamelModel):
    trip_id: str = Field(..., min_length=1)


@router.post(
    "/generate",
    response_model=ApiResponse[SafetyReportData],
    status_code=status.HTTP_201_CREATED,
)
def generate(
    request: GenerateSafetyReportRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
    provider: CompletionProvider = Depends(get_completion_provider),
) -> ApiResponse[SafetyReportData]:
    """Generate a safety report personalized by the caller's safety profile."""
    report = generate_safety_report(
        session, provider, current_user.user_id, request.trip_id
    )
    return ApiResponse(
        data=SafetyReportData(safety_report=SafetyReportOut.model_validate(report))
    )


@router.get("/{trip_id}", response_model=ApiResponse[SafetyReportData])
def read(
    trip_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> ApiResponse[SafetyReportData]:
    """Get the safety report for a trip."""
    report = get_safety_report(session, current_user.user_id, trip_id)
    return ApiResponse(
        data=SafetyReportData(safety_report=SafetyReportOut.model_validate(report))
    )
