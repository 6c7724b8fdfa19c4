"""Error Handlers — global exception handlers for the backoffice API.

Invariants:
    - BackofficeError → {"error", "code"} with its http_status; 5xx bodies are generic
    - RequestValidationError → 400 with field-level details
    - HTTPException (unknown route, wrong method) → same {"error", "code"} shape
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Layered handlers: domain (BackofficeError), validation (Pydantic),
      framework (HTTPException), catch-all (Exception)
    - Domain errors log at their own severity (404 info, 400/401/403 warning,
      5xx critical) with path, principal and error category attached
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.core.errors import (
    BackofficeError, ErrorContext, ErrorSeverity, GENERIC_SERVER_MESSAGE,
)

logger = logging.getLogger(__name__)

_SEVERITY_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BackofficeError)
    async def backoffice_error_handler(request: Request, exc: BackofficeError):
        """Handle all domain/infrastructure errors."""
        _fill_context(exc.context, request)
        logger.log(
            _SEVERITY_LEVELS[exc.severity],
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "error_category": exc.category.value,
                "path": exc.context.path,
                "method": request.method,
                "status_code": exc.http_status,
                "principal_id": exc.context.principal_id,
                "user_type": exc.context.user_type,
                "field": getattr(exc, "field", None),
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _fill_context(context: ErrorContext, request: Request) -> None:
    """Attach request path and, once the gate has run, the caller's identity."""
    context.path = context.path or request.url.path
    principal = getattr(request.state, "principal", None)
    if principal is not None:
        context.principal_id = context.principal_id or principal.user_id
        context.user_type = context.user_type or principal.user_type.value


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message, "code": f"HTTP_{exc.status_code}"},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": GENERIC_SERVER_MESSAGE, "code": "INTERNAL_ERROR"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": "Invalid request data",
        "code": "VALIDATION_ERROR",
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
