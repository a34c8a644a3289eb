"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from health_tracker.api.auth import router as auth_router
from health_tracker.api.tracking import router as tracking_router
from health_tracker.app_logging import configure_logging
from health_tracker.config import parse_cors_origins
from health_tracker.containers import AppContainer
from health_tracker.errors import (
    HealthTrackerError,
    InvalidCredentialError,
    MalformedInputError,
    MissingCredentialError,
    UpstreamFailure,
)

_STATUS_CODES: dict[type[HealthTrackerError], int] = {
    MissingCredentialError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialError: status.HTTP_401_UNAUTHORIZED,
    MalformedInputError: status.HTTP_400_BAD_REQUEST,
    UpstreamFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    origins = parse_cors_origins(container.settings.cors_allow_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(auth_router)
    app.include_router(tracking_router)

    @app.exception_handler(HealthTrackerError)
    async def handle_app_error(
        request: Request, exc: HealthTrackerError
    ) -> JSONResponse:
        status_code = _status_code_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed: %s %s",
                request.method,
                request.url.path,
                exc_info=exc,
            )
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request body",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_code_for(exc: HealthTrackerError) -> int:
    for error_type, status_code in _STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
