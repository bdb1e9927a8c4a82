"""Error Hierarchy — typed, categorized exceptions for dashboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Raised errors are for unexpected or boundary-specific failures only;
      form validation and persistence failures travel as MutationOutcome values
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with DashboardError base: one global handler catches all (ADR: uniform error shape)
    - AuthenticationError carries the provider's failure `type` string so the
      credential exchange can classify it without string-matching messages
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    invoice_id: str | None = None
    path: str | None = None


class DashboardError(Exception):
    """Base exception for all dashboard errors."""

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
                    "invoice_id": self.context.invoice_id,
                    "path": self.context.path,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(DashboardError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


CREDENTIALS_SIGNIN = "CredentialsSignin"
CONFIGURATION = "Configuration"


class AuthenticationError(DashboardError):
    """Identity provider rejected a sign-in attempt.

    `type` mirrors the provider's failure category, e.g. "CredentialsSignin"
    for bad credentials or "Configuration" for an unknown provider.
    """
    def __init__(
        self, type: str, message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"Authentication failed ({type})",
            "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.type = type


# ─── Operation Errors (500-level) ───────────────────────────────

class InvoiceDeletionError(DashboardError):
    """Invoice deletion is refused."""
    def __init__(self, invoice_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.invoice_id = invoice_id
        super().__init__(
            "Failed to Delete Invoice",
            "INVOICE_DELETE_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )


class DatabaseError(DashboardError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ConfigurationError(DashboardError):
    """Required configuration is missing or invalid (startup-fatal)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
