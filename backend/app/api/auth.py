"""Authentication API endpoints and dependencies."""

import logging
from uuid import UUID

__all__ = ["CurrentUser", "get_current_user", "router"]

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.api.responses import ApiResponse
from backend.app.api.schemas import AuthData, UserData, UserOut
from backend.app.db.models.user import User
from backend.app.db.session import get_session
from backend.app.errors import AuthError, ConflictError
from backend.app.models.common import CamelModel
from backend.app.security import (
    AuthenticationError,
    TokenExpiredError,
    create_access_token,
    hash_password,
    needs_rehash,
    verify_access_token,
    verify_password,
)
from backend.app.security.passwords import MAX_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


class RegisterRequest(CamelModel):
    """Registration payload."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=MAX_PASSWORD_LENGTH)
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)


class LoginRequest(CamelModel):
    """Login request payload."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class CurrentUser(BaseModel):
    """Current authenticated user context."""

    user_id: UUID
    email: str


# HTTP Bearer token security scheme; missing headers are reported by us
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_session),
) -> CurrentUser:
    """Resolve the bearer token to the current user.

    Args:
        credentials: HTTP Authorization header with Bearer token
        db: Database session

    Returns:
        CurrentUser with user_id and email

    Raises:
        AuthError: Token missing, invalid, expired, or its user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("No token provided")

    try:
        payload = verify_access_token(credentials.credentials)
    except TokenExpiredError:
        raise AuthError("Token expired")
    except AuthenticationError as e:
        logger.debug("Rejected bearer token: %s", e)
        raise AuthError("Invalid token")

    user = db.get(User, payload.user_id)
    if user is None:
        raise AuthError("Invalid token")

    return CurrentUser(user_id=user.user_id, email=user.email)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _find_user_by_email(db: Session, email: str) -> User | None:
    stmt = select(User).where(func.lower(User.email) == email)
    return db.execute(stmt).scalar_one_or_none()


def _auth_response(user: User) -> ApiResponse[AuthData]:
    token = create_access_token(user.user_id, user.email)
    return ApiResponse(data=AuthData(user=UserOut.model_validate(user), token=token))


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
)
def register(
    request: RegisterRequest, db: Session = Depends(get_session)
) -> ApiResponse[AuthData]:
    """Create an account and return it with an access token.

    Raises:
        ConflictError: If the e-mail is already registered
    """
    email = _normalize_email(request.email)
    if _find_user_by_email(db, email) is not None:
        raise ConflictError("Email already registered")

    user = User(
        email=email,
        password_hash=hash_password(request.password),
        first_name=request.first_name,
        last_name=request.last_name,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")

    logger.info("Registered user %s", user.user_id)
    return _auth_response(user)


@router.post("/login", response_model=ApiResponse[AuthData])
def login(
    request: LoginRequest, db: Session = Depends(get_session)
) -> ApiResponse[AuthData]:
    """Authenticate with e-mail and password.

    Raises:
        AuthError: Unknown e-mail or wrong password (indistinguishable)
    """
    user = _find_user_by_email(db, _normalize_email(request.email))
    if user is None or not verify_password(request.password, user.password_hash):
        raise AuthError("Invalid credentials")

    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(request.password)
        db.commit()

    return _auth_response(user)


@router.post("/logout", response_model=ApiResponse[None])
def logout(current_user: CurrentUser = Depends(get_current_user)) -> ApiResponse[None]:
    """Acknowledge logout; tokens are stateless and discarded client-side."""
    return ApiResponse(message="Logged out successfully")


@router.get("/me", response_model=ApiResponse[UserData])
def get_current_user_info(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ApiResponse[UserData]:
    """Get the current user, including the safety profile."""
    user = db.get(User, current_user.user_id)
    if user is None:
        raise AuthError("Invalid token")
    return ApiResponse(data=UserData(user=UserOut.model_validate(user)))
