"""Error Hierarchy — typed, categorized exceptions for every backoffice failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (4xx) carry a descriptive message; server errors (5xx) never
      expose their message, only GENERIC_SERVER_MESSAGE
    - to_response() produces the REST envelope {"error": str, "code": str};
      a ValidationError naming a field adds "details" like request validation does

Design Decisions:
    - Single hierarchy with BackofficeError base: one FastAPI handler covers all
    - ErrorContext as dataclass: observability fields travel with the error, not the
      response. The API handler fills path and principal before logging
"""

from dataclasses import dataclass
from enum import Enum

GENERIC_SERVER_MESSAGE = "An unexpected error occurred"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    STORAGE = "storage"
    SERIALIZATION = "serialization"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Server-side context for logs. Never serialized into responses."""
    principal_id: str | None = None
    user_type: str | None = None
    path: str | None = None


class BackofficeError(Exception):
    """Base exception for all backoffice errors."""

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

    @property
    def public_message(self) -> str:
        """Message safe to return to the caller."""
        if self.http_status >= 500:
            return GENERIC_SERVER_MESSAGE
        return self.message

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.public_message, "code": self.code}


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(BackofficeError):
    """Request parameter missing or malformed."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        body = super().to_response()
        if self.field:
            body["details"] = [{"field": self.field, "message": self.message}]
        return body


class AuthenticationError(BackofficeError):
    """No valid session on the request."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(BackofficeError):
    """Session present but the role lacks the required capability."""
    def __init__(self, message: str = "Access denied", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(BackofficeError):
    """Requested resource does not exist (or is outside the caller's scope)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Server Errors (500-level) ──────────────────────────────────

class UpstreamError(BackofficeError):
    """Unexpected failure in a collaborator, converted at the handler boundary."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(BackofficeError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class StorageError(BackofficeError):
    """Object storage call failed."""
    def __init__(self, message: str, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage operation failed for '{key}': {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.key = key


class SerializationError(BackofficeError):
    """A value could not be represented as JSON."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SERIALIZATION_ERROR", ErrorCategory.SERIALIZATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
