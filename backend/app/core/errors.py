"""Error Hierarchy — typed, categorized exceptions for all catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) are surfaced as-is and never retried
    - Retrieval failures always carry the original store exception as __cause__
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CatalogError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Single-record lookup failures are NOT represented here — they are absorbed
      to "not found" by PlayerLookup
"""

from dataclasses import dataclass, field
from enum import Enum
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
    RETRIEVAL = "retrieval"
    CAPACITY = "capacity"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    player_id: str | None = None
    operation: str | None = None
    pool: str | None = None


class CatalogError(Exception):
    """Base exception for all player catalog errors."""

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
                "context": {
                    "player_id": self.context.player_id,
                    "operation": self.context.operation,
                    "pool": self.context.pool,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidSortDirectionError(CatalogError):
    """Sort direction is neither 'asc' nor 'desc'."""
    def __init__(self, direction: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid sort direction '{direction}'. Expected 'asc' or 'desc'.",
            "INVALID_SORT_DIRECTION", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.direction = direction


class ResourceNotFoundError(CatalogError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class RetrievalFailureError(CatalogError):
    """Store read or write failed during listing, pagination or save."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Failed to {operation}",
            "RETRIEVAL_FAILURE", ErrorCategory.RETRIEVAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class OverloadedError(CatalogError):
    """Worker pool queue and thread capacity are exhausted."""
    def __init__(
        self, pool: str, queue_capacity: int, max_size: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.pool = pool
        super().__init__(
            f"Pool '{pool}' is saturated ({max_size} threads busy, "
            f"{queue_capacity} tasks queued)",
            "OVERLOADED", ErrorCategory.CAPACITY,
            ErrorSeverity.ERROR, ctx, 503,
        )
        self.pool = pool


class DatabaseError(CatalogError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
