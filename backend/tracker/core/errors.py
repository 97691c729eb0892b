"""Error Hierarchy — typed, categorized exceptions for all tracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) carry no side effects: they are raised before
      the persistence mutation runs
    - PersistenceError is the only error raised after a precondition passed
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with TrackerError base: FastAPI global handler catches all
      (uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging
    - Cache and event failures have no error type here — they never leave the
      mutation handler
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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class AuthorizationError(TrackerError):
    """Request has no (valid) actor identity."""
    def __init__(
        self, message: str = "Unauthorized: No user id",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class RequestValidationFailure(TrackerError):
    """A required identifier or field is missing."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(TrackerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str,
        message: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ProjectNotFoundError(ResourceNotFoundError):
    """Parent project reference does not resolve."""
    def __init__(self, project_id: str, context: ErrorContext | None = None):
        super().__init__("Project", project_id, "Project not found", context)


class TaskNotFoundError(ResourceNotFoundError):
    """Task missing, or it belongs to a different project."""
    def __init__(self, task_id: str, context: ErrorContext | None = None):
        super().__init__(
            "Task", task_id, "Task not found for the given project", context,
        )


class ConflictError(TrackerError):
    """Unique constraint would be violated (e.g. duplicate email)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(TrackerError):
    """The single persistence mutation of a request failed."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Internal Server Error: {operation}",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class DatabaseError(TrackerError):
    """Database session failed outside a mutation handler."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
