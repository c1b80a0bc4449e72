"""Error Hierarchy — typed, categorized exceptions for all dictionary failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - HTTP status derives from the category via http_status_for() — one mapping, no literals in routes
    - Client errors (4xx) are recoverable; infrastructure/import errors (5xx) are not
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DictionaryError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging framework
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    IMPORT = "import"
    DATABASE = "database"
    INTERNAL = "internal"


_STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.BUSINESS_RULE: 400,
    ErrorCategory.RESOURCE_NOT_FOUND: 404,
    ErrorCategory.CONFLICT: 409,
    ErrorCategory.IMPORT: 500,
    ErrorCategory.DATABASE: 503,
    ErrorCategory.INTERNAL: 500,
}


def http_status_for(category: ErrorCategory) -> int:
    """Map an error category to its HTTP status code."""
    return _STATUS_BY_CATEGORY.get(category, 500)


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    name: str | None = None
    debug_info: dict[str, Any] | None = None


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure."""
    field: str
    message: str


def format_field_errors(errors: list[FieldError]) -> str:
    """Legacy aggregate: '<field> <message>' pairs joined by spaces."""
    return " ".join(f"{e.field} {e.message}" for e in errors)


class DictionaryError(Exception):
    """Base exception for all name dictionary errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def http_status(self) -> int:
        return http_status_for(self.category)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {"name": self.context.name},
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class PayloadValidationError(DictionaryError):
    """Request payload failed validation."""
    def __init__(self, errors: list[FieldError], context: ErrorContext | None = None):
        super().__init__(
            format_field_errors(errors), "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, context,
        )
        self.errors = errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [
            {"field": e.field, "message": e.message} for e in self.errors
        ]
        return response


class NameMismatchError(DictionaryError):
    """Name in the URL differs from the name in the request payload."""
    def __init__(self, path_name: str, payload_name: str, context: ErrorContext | None = None):
        super().__init__(
            "Name given in URL is different from name in request payload",
            "NAME_MISMATCH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.path_name = path_name
        self.payload_name = payload_name


class NameNotFoundError(DictionaryError):
    """Requested name does not exist."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.name = name
        super().__init__(
            f"{name} not found in the database",
            "NAME_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx,
        )


class ResourceConflictError(DictionaryError):
    """Resource with the same identifier already exists."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' already exists",
            "RESOURCE_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class ImportFailedError(DictionaryError):
    """Bulk import reported one or more row failures."""
    def __init__(self, error_messages: list[str], context: ErrorContext | None = None):
        super().__init__(
            str(error_messages), "IMPORT_FAILED", ErrorCategory.IMPORT,
            ErrorSeverity.CRITICAL, context,
        )
        self.error_messages = error_messages


class DatabaseError(DictionaryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
