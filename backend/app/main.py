"""FastAPI application factory."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api.auth import router as auth_router
from backend.app.api.health import get_health
from backend.app.api.itineraries import router as itineraries_router
from backend.app.api.responses import error_body
from backend.app.api.safety import router as safety_router
from backend.app.api.suggestions import router as suggestions_router
from backend.app.api.trips import router as trips_router
from backend.app.api.users import router as users_router
from backend.app.config import get_settings
from backend.app.errors import AppError, ValidationError
from backend.app.logging_config import configure_logging
from backend.app.security.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)

logger = logging.getLogger(__name__)


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error to the standard failure envelope."""
    settings = get_settings()

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        extra: dict[str, Any] = {}
        if isinstance(exc, ValidationError) and exc.errors:
            extra["errors"] = exc.errors
        if getattr(exc, "retryable", False):
            extra["retryable"] = True

        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        if exc.status_code >= 500:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, **extra),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(ValidationError.default_message, errors=errors),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        detail = str(exc) if settings.environment == "development" else None
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Something went wrong", error=detail),
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Wayfarer Travel Planner API",
        description="AI trip planning: itineraries, safety reports and travel suggestions",
        version="0.1.0",
    )

    # Security middleware (before CORS)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ui_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/healthz")
    def healthz() -> dict[str, Any]:
        """Health check endpoint."""
        return get_health().model_dump()

    # Include routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(trips_router)
    app.include_router(itineraries_router)
    app.include_router(safety_router)
    app.include_router(suggestions_router)

    logger.info("Application configured (environment=%s)", settings.environment)
    return app


# Create app instance for uvicorn
app = create_app()
