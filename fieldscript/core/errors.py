"""Error Hierarchy: typed, categorized exceptions raised by the engine itself.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Handler faults are NEVER wrapped: they propagate as whatever the handler raised
    - Rejections (rc = False) and missing targets are not errors and have no class here
    - to_dict() produces a JSON-safe envelope for hosts that report engine errors

Design Decisions:
    - Single hierarchy with FieldScriptError base: hosts can catch engine errors in one place
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and host handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field_id: str | None = None
    event_name: str | None = None
    debug_info: dict[str, Any] | None = None


class FieldScriptError(Exception):
    """Base exception for all engine-raised errors."""

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

    def to_dict(self) -> dict:
        """Convert to a standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "field_id": self.context.field_id,
                    "event_name": self.context.event_name,
                    "debug_info": self.context.debug_info,
                },
            }
        }


# ─── Boundary Errors ────────────────────────────────────────────

class InvalidInteractionError(FieldScriptError):
    """Raw interaction could not be read (not a mapping, or missing id/name)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INTERACTION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )


# ─── Pipeline Errors ────────────────────────────────────────────

class EventValueLockedError(FieldScriptError, AttributeError):
    """A handler assigned event.value while it was locked (Blur/Focus)."""
    def __init__(self, event_name: str | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.event_name = event_name
        super().__init__(
            f"event.value is read-only during {event_name or 'this'} event",
            "EVENT_VALUE_LOCKED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx,
        )
