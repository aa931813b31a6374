"""Error Handlers: global exception handlers rendering the failure envelope.

Invariants:
    - PotholeError → {success: false, error} with the error's own status
    - RequestValidationError → 400 "Invalid data provided" plus field-level details
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (PotholeError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from pothole_api.core.errors import PotholeError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_pothole_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_pothole_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PotholeError)
    async def pothole_error_handler(request: Request, exc: PotholeError):
        """Handle all gateway domain/infrastructure errors."""
        log = (
            logger.error if exc.severity == ErrorSeverity.CRITICAL
            else logger.info
        )
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic body validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "An unexpected error occurred"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "success": False,
        "error": "Invalid data provided",
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
