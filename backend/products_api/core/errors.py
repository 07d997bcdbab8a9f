"""Error Hierarchy - typed, categorized exceptions for all Products API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope; InputValidationError renders its own errors list
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ProductsApiError base: FastAPI global handler catches all (uniform error shape)
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    FORBIDDEN = "forbidden"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    product_id: int | None = None
    debug_info: dict[str, Any] | None = None


class ProductsApiError(Exception):
    """Base exception for all Products API errors."""

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


# ─── Client Errors (400-level) ──────────────────────────────────

class InputValidationError(ProductsApiError):
    """One or more request fields failed their validation rules."""
    def __init__(self, errors: list[dict], context: ErrorContext | None = None):
        super().__init__(
            f"{len(errors)} field(s) failed validation",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        return {"errors": self.errors}


class ResourceNotFoundError(ProductsApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class CorsOriginError(ProductsApiError):
    """Request origin is not the configured frontend origin."""
    def __init__(self, origin: str | None, context: ErrorContext | None = None):
        super().__init__(
            "CORS error: origin not allowed",
            "CORS_ORIGIN_REJECTED", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )
        self.origin = origin


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ProductsApiError):
    """Database operation failed. Message is opaque to clients."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
        self.detail = f"Database {operation} failed: {message}"
