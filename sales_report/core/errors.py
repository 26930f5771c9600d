"""Error Hierarchy — typed, categorized exceptions for every record failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable by correcting input; storage errors (500-level) are not
    - to_response() produces the REST envelope; to_command_result() the command envelope
    - User-facing message is always a single descriptive string; storage internals stay in logs

Design Decisions:
    - Single hierarchy with SalesReportError base: API handler and command dispatch catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    record_id: int | None = None
    field: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class SalesReportError(Exception):
    """Base exception for all record backend errors."""

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
    def recoverable(self) -> bool:
        return self.severity is not ErrorSeverity.CRITICAL

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entity": self.context.entity,
                    "record_id": self.context.record_id,
                    "field": self.context.field,
                },
            }
        }

    def to_command_result(self) -> dict:
        """Convert to the command-boundary error shape."""
        return {
            "status": "error",
            "error_code": self.code,
            "message": self.message,
            "field": self.context.field,
            "recoverable": self.recoverable,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidFieldError(SalesReportError):
    """A field rule was violated (emptiness, length, GST format, category id)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "INVALID_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class ConflictError(SalesReportError):
    """A uniqueness constraint would be violated."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.field = field


class ResourceNotFoundError(SalesReportError):
    """Referenced identity does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = resource_type
        ctx.record_id = resource_id
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class NoFieldsToUpdateError(SalesReportError):
    """An update request supplied no fields."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No fields to update",
            "NO_FIELDS_TO_UPDATE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageUnavailableError(SalesReportError):
    """Persistence collaborator failed for reasons unrelated to the data."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            "Storage is unavailable",
            "STORAGE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
