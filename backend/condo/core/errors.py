"""Error Hierarchy — typed, categorized exceptions for all core failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller mistakes (400/404) never mutate state; capacity rejection (409) is a
      business outcome, not a fault; storage failures (503) are always surfaced
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CondoError base: FastAPI global handler catches all
    - ErrorContext as dataclass: record ids for observability without coupling to logging
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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Record identifiers and hints attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    facility_id: int | None = None
    invoice_id: int | None = None
    payment_id: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class CondoError(Exception):
    """Base exception for all condo core errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "facility_id": self.context.facility_id,
                    "invoice_id": self.context.invoice_id,
                    "payment_id": self.context.payment_id,
                },
            }
        }


# ─── Caller Errors (400-level) ───────────────────────────────────

class InputValidationError(CondoError):
    """Malformed or missing required input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(CondoError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class CapacityExceededError(CondoError):
    """Slot already holds as many bookings as the facility allows."""
    def __init__(
        self, time_slot: str, capacity: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or (
            "This time slot is full. Please choose another."
        )
        super().__init__(
            f"Slot '{time_slot}' is at capacity ({capacity})",
            "SLOT_FULL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.time_slot = time_slot
        self.capacity = capacity


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CondoError):
    """Database operation failed; the transaction was rolled back."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
