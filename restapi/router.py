"""Application configuration and router setup."""

import logging
from typing import Optional

import fastapi
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware import cors
from fastapi.responses import JSONResponse

from components.core import init_db
from components.core.config import get_settings
from components.core.database import DatabaseManager
from components.core.exceptions import (
    AlreadyExistsError,
    InvalidOperationError,
    LoanManagementError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from components.core.logging import configure_logging
from components.core.validators import error_messages
from restapi.endpoints import accountant, auth, health_check, user

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    InvalidOperationError: status.HTTP_409_CONFLICT,
    AlreadyExistsError: status.HTTP_400_BAD_REQUEST,
    ValidationFailedError: status.HTTP_400_BAD_REQUEST,
}


def validation_failed_response(errors) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed.", "errors": errors},
    )


async def handle_service_error(request: fastapi.Request, exc: LoanManagementError) -> JSONResponse:
    """Map a service failure to its HTTP status."""
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    if isinstance(exc, ValidationFailedError):
        return validation_failed_response(exc.errors)
    status_code = next(
        (code for kind, code in STATUS_BY_ERROR.items() if isinstance(exc, kind)),
        status.HTTP_400_BAD_REQUEST,
    )
    return JSONResponse(status_code=status_code, content={"message": exc.message})


async def handle_request_validation_error(
    request: fastapi.Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed payloads the same way the services do."""
    logger.warning("%s %s validation failed.", request.method, request.url.path)
    return validation_failed_response(error_messages(exc.errors()))


def create_app(db_manager: Optional[DatabaseManager] = None) -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = fastapi.FastAPI(
        title="Loan Management",
        description="Loan requests for users and their review by accountants",
        version="1.0.0",
        lifespan=init_db.lifespan,
    )

    # Initialize database
    init_db.init_db(app, db_manager)

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LoanManagementError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    # Include routers
    app.include_router(health_check.router)
    app.include_router(auth.router)
    app.include_router(user.router)
    app.include_router(accountant.router)

    return app
