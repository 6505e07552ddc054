"""Error Hierarchy — typed, categorized exceptions for the HTTP boundary.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - The core never raises these: intents are silently rejected there, and the
      API shell translates guard violations into these errors
    - to_response() produces REST envelope; to_sse_event() produces SSE envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with GraphwalkError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    intent: str | None = None
    node_id: int | None = None
    user_message: str | None = None

    def log_extra(self) -> dict:
        """Structured logging fields for this context (None values dropped)."""
        fields = {
            "session_id": self.session_id,
            "intent": self.intent,
            "node_id": self.node_id,
        }
        return {k: v for k, v in fields.items() if v is not None}


class GraphwalkError(Exception):
    """Base exception for all Graphwalk errors."""

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
                    "session_id": self.context.session_id,
                    "intent": self.context.intent,
                    "node_id": self.context.node_id,
                },
            }
        }

    def to_sse_event(self) -> dict:
        """Convert to SSE error event."""
        return {
            "type": "error",
            "data": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "severity": self.severity.value,
                "recoverable": self.severity in (
                    ErrorSeverity.INFO, ErrorSeverity.WARNING,
                ),
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(GraphwalkError):
    """Requested session or node does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class RunInProgressError(GraphwalkError):
    """Intent attempted while a traversal holds the run lock."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "A traversal is running. Wait for it to finish or cancel it.",
            "RUN_IN_PROGRESS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class RunNotReadyError(GraphwalkError):
    """Run triggered without an algorithm or a start node."""
    def __init__(self, missing: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Cannot run yet, missing: {', '.join(missing)}",
            "RUN_NOT_READY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.missing = missing


# ─── Internal Errors (500) ──────────────────────────────────────

class InternalError(GraphwalkError):
    """Unexpected failure in a route or a running traversal."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
