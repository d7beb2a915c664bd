"""Error Hierarchy: typed, categorized exceptions for every CircleNet failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Concepts raise these unchanged; nothing in services/ catches and rewraps them
    - Errors carry no transport status; api/error_handlers.py maps category to HTTP
    - to_response() produces the REST envelope

Design Decisions:
    - NotAllowedError is the parent of every authorization and uniqueness violation,
      so callers can catch the whole family or one specific rule
    - ErrorContext as dataclass: ids for observability without coupling to logging
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
    AUTHENTICATION = "authentication"
    NOT_ALLOWED = "not_allowed"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Identifiers involved in the failed action."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    group_id: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CircleNetError(Exception):
    """Base exception for all CircleNet errors."""

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
                    "user_id": self.context.user_id,
                    "group_id": self.context.group_id,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Domain Errors ──────────────────────────────────────────────

class NotFoundError(CircleNetError):
    """Referenced entity (group, permission, post, request) does not exist."""
    def __init__(
        self, message: str, resource_type: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context,
        )
        self.resource_type = resource_type


class NotAllowedError(CircleNetError):
    """Well-formed operation that violates an authorization or uniqueness rule."""
    def __init__(
        self,
        message: str,
        code: str = "NOT_ALLOWED",
        category: ErrorCategory = ErrorCategory.NOT_ALLOWED,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.WARNING, context,
        )


class ForbiddenError(NotAllowedError):
    """Caller lacks the creator/author role or a capability grant."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "FORBIDDEN", ErrorCategory.NOT_ALLOWED, context)


class NameConflictError(NotAllowedError):
    """A group with this name already exists."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Group with name {name} already exists!",
            "NAME_CONFLICT", ErrorCategory.CONFLICT, context,
        )
        self.name = name


class AlreadyMemberError(NotAllowedError):
    """Account is already in the group's member set."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Account already in group!",
            "ALREADY_MEMBER", ErrorCategory.CONFLICT, context,
        )


class NotMemberError(NotAllowedError):
    """Account is absent from the group's member set."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Account not in group!",
            "NOT_MEMBER", ErrorCategory.CONFLICT, context,
        )


class AlreadyLikedError(NotAllowedError):
    """(user, resource) like relation already exists."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Post is already liked!",
            "ALREADY_LIKED", ErrorCategory.CONFLICT, context,
        )


class NotLikedError(NotAllowedError):
    """(user, resource) like relation does not exist."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Post is not liked!",
            "NOT_LIKED", ErrorCategory.CONFLICT, context,
        )


class UnauthenticatedError(CircleNetError):
    """No caller identity was supplied with the request."""
    def __init__(self, message: str = "You must be logged in!"):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

class ConcurrencyConflictError(CircleNetError):
    """Optimistic version check kept failing after all retries."""
    def __init__(
        self, message: str, attempts: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )
        self.attempts = attempts


class DatabaseError(CircleNetError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
