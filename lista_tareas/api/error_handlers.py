"""Error Handlers — global exception handlers for the task API.

Invariants:
    - TareasError → its own http_status with {"error", "code", ["details"]}
      and a log record at the level of its severity
    - RequestValidationError → 400 with the Spanish message for the offending field
      (path id errors win over body errors)
    - Unmatched route or method → 404 {"error": "Ruta no encontrada"}
    - Exception (catch-all) → 500 generic body, never leaks internal details

Design Decisions:
    - Layered handlers: domain (TareasError), validation (Pydantic), routing
      (Starlette HTTPException), catch-all (Exception)
    - Extracted from main.py to keep the entry point's import fan-out small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from lista_tareas.core.errors import (
    ErrorSeverity, RouteNotFoundError, TareasError, TaskValidationError,
)
from lista_tareas.core.task_rules import (
    COMPLETADA_NOT_BOOLEAN, DESCRIPCION_REQUIRED, INVALID_TASK_ID,
)

logger = logging.getLogger(__name__)

_FIELD_MESSAGES = {
    "descripcion": DESCRIPCION_REQUIRED,
    "completada": COMPLETADA_NOT_BOOLEAN,
    "task_id": INVALID_TASK_ID,
}
# Whole-body errors (missing or non-object JSON) by method
_BODY_MESSAGES = {
    "POST": DESCRIPCION_REQUIRED,
    "PUT": COMPLETADA_NOT_BOOLEAN,
}
_GENERIC_VALIDATION_MESSAGE = "Datos de la solicitud inválidos"
_LOG_LEVELS = {
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
    """Register task-service domain/infrastructure error handler."""

    @app.exception_handler(TareasError)
    async def tareas_error_handler(request: Request, exc: TareasError):
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"TareasError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "severity": exc.severity.value,
            },
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
        error = validation_error(exc.errors(), request.method)
        logger.log(
            _LOG_LEVELS[error.severity],
            f"Validation error on {request.method} {request.url.path}: {error.message}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unmatched paths and methods)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            not_found = RouteNotFoundError(request.method, request.url.path)
            logger.log(
                _LOG_LEVELS[not_found.severity],
                f"Route not found: {request.method} {request.url.path}",
                extra={"error_code": not_found.code, "path": request.url.path},
            )
            return JSONResponse(
                status_code=not_found.http_status, content=not_found.to_response(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
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
            content={"error": "Error interno del servidor", "code": "INTERNAL_ERROR"},
        )


def validation_error(errors: list[dict], method: str) -> TaskValidationError:
    """Pick the field and user-facing message for a list of Pydantic errors."""
    ordered = sorted(errors, key=lambda e: e["loc"][:1] != ("path",))
    for error in ordered:
        loc = error["loc"]
        if len(loc) > 1 and loc[-1] in _FIELD_MESSAGES:
            return TaskValidationError(_FIELD_MESSAGES[loc[-1]], str(loc[-1]))
    message = _BODY_MESSAGES.get(method.upper(), _GENERIC_VALIDATION_MESSAGE)
    return TaskValidationError(message, "body")
