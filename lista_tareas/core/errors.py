"""Error Hierarchy — typed, categorized exceptions for every task-service failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and the HTTP status the API answers with
    - Client errors (400/404) are recoverable; storage errors (500/503) are critical
    - to_response() produces the flat {"error": ..., "code": ...} REST envelope the
      front end reads; "details" only present when the underlying cause is known
    - User-facing messages are Spanish (public API contract)

Design Decisions:
    - Single hierarchy with TareasError base: one global handler maps all of them and
      logs each at the level of its severity
    - Availability errors (pool missing, no connection) are their own types instead of
      message matching: the 503/500 split is decided by isinstance, not by substrings
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    UNAVAILABLE = "unavailable"
    ROUTING = "routing"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task_id: int | None = None
    operation: str | None = None


class TareasError(Exception):
    """Base exception for all task-service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class TaskValidationError(TareasError):
    """Request input failed a boundary rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class TaskNotFoundError(TareasError):
    """No row matched the requested task id."""
    def __init__(self, task_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__(
            "Tarea no encontrada", "TASK_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, ctx, 404,
        )
        self.task_id = task_id


class RouteNotFoundError(TareasError):
    """No route matched the request."""
    def __init__(self, method: str, path: str):
        super().__init__(
            "Ruta no encontrada", "ROUTE_NOT_FOUND", ErrorCategory.ROUTING,
            ErrorSeverity.WARNING, None, 404,
        )
        self.method = method
        self.path = path


# ─── Storage Availability Errors (503) ──────────────────────────

class PoolNotInitializedError(TareasError):
    """Pool accessed before initialize() succeeded."""
    def __init__(self, message: str = "El pool de la base de datos no ha sido inicializado."):
        super().__init__(
            message, "POOL_NOT_INITIALIZED", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.CRITICAL, None, 503,
        )


class ConnectionUnavailableError(TareasError):
    """A connection could not be acquired from the pool."""
    def __init__(self, details: str | None = None):
        super().__init__(
            "No se pudo obtener conexión con la base de datos",
            "CONNECTION_UNAVAILABLE", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.CRITICAL, None, 503, details,
        )


class DatabaseConnectError(TareasError):
    """Pool initialization exhausted its attempts."""
    def __init__(self, attempts: int, details: str | None = None):
        super().__init__(
            "No se pudo conectar a la base de datos después de varios intentos.",
            "DATABASE_CONNECT_FAILED", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.CRITICAL, None, 503, details,
        )
        self.attempts = attempts


# ─── Storage Errors (500) ───────────────────────────────────────

class DatabaseError(TareasError):
    """Statement failed for a reason other than availability."""
    def __init__(
        self, message: str, operation: str, details: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500, details,
        )
        self.operation = operation
