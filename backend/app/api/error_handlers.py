"""Error Handlers — global exception handlers for the name dictionary API.

Invariants:
    - DictionaryError → structured JSON with error code, message, severity; status from its category
    - RequestValidationError → 400 with field-level details AND the legacy
      "<field> <message>" aggregate in `message`
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (DictionaryError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import (
    DictionaryError, ErrorSeverity, FieldError, format_field_errors,
)

logger = logging.getLogger(__name__)

_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_dictionary_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_dictionary_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(DictionaryError)
    async def dictionary_error_handler(request: Request, exc: DictionaryError):
        """Handle all name dictionary domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"DictionaryError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def field_name(loc: tuple | list) -> str:
    """('body', 0, 'name') → '[0].name'; ('body', 'submittedBy') → 'submittedBy'."""
    parts = list(loc)
    if parts and parts[0] in _LOCATIONS:
        parts = parts[1:]
    name = ""
    for part in parts:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name += f".{part}" if name else str(part)
    return name or "body"


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    field_errors = [FieldError(field_name(e["loc"]), e["msg"]) for e in exc.errors()]
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": format_field_errors(field_errors),
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": fe.field,
                    "message": fe.message,
                    "type": e["type"],
                }
                for fe, e in zip(field_errors, exc.errors())
            ],
        },
    }
