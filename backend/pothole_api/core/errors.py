"""Error Hierarchy: typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400) are raised before any service is called
    - to_response() always produces the {success: false, error} envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PotholeError base: FastAPI global handler catches all (ADR: uniform error shape)
    - One envelope for 400/404/409/500 alike; the older {error}-only variant is retired
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
    CONFLICT = "conflict"
    DELEGATE = "delegate"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    route: str | None = None
    parameter: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class PotholeError(Exception):
    """Base exception for all gateway errors."""

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
        """Convert to the failure envelope."""
        return {"success": False, "error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class ParameterValidationError(PotholeError):
    """Malformed or out-of-range request parameter."""
    def __init__(self, message: str, parameter: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.parameter = parameter
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.parameter = parameter


class MissingParameterError(ParameterValidationError):
    """Required request parameter absent or blank."""
    def __init__(self, message: str, parameter: str, context: ErrorContext | None = None):
        super().__init__(message, parameter, context)
        self.code = "MISSING_PARAMETER"


class ResourceNotFoundError(PotholeError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ReportNotFoundError(ResourceNotFoundError):
    """Pothole report id has no row."""
    def __init__(self, report_id: str, context: ErrorContext | None = None):
        super().__init__("Report", report_id, context)


class DuplicateReportError(PotholeError):
    """A report already exists within the duplicate radius."""
    def __init__(
        self, radius_meters: int, nearby: list[dict], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"A pothole has already been reported within {radius_meters} meters of this location",
            "DUPLICATE_REPORT", ErrorCategory.CONFLICT,
            ErrorSeverity.INFO, context, 409,
        )
        self.nearby = nearby

    def to_response(self) -> dict:
        response = super().to_response()
        response["nearbyReports"] = self.nearby
        return response


# ─── Server Errors (500-level) ──────────────────────────────────

class DelegateFailureError(PotholeError):
    """A service call failed; message is the route's generic summary."""
    def __init__(self, message: str, route: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.route = route
        super().__init__(
            message, "DELEGATE_FAILURE", ErrorCategory.DELEGATE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.route = route


class DatabaseError(PotholeError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
