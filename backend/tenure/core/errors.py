"""Error Taxonomy — rejection kinds for promotions and typed infrastructure exceptions.

Invariants:
    - Every ErrorKind has a stable code (str), category (ErrorCategory) and http_status
    - Business-rule failures are values (Rejection), never raised
    - TenureError subclasses are reserved for infrastructure faults and read-side misses
    - to_response() produces the same REST envelope for both (error_envelope)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Rejection as frozen dataclass: callers inspect .kind instead of catching
      typed exceptions (validation is ordinary control flow here)
    - Single TenureError base: FastAPI global handler catches all raised errors
      with a uniform error shape
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


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
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    emp_no: int | None = None
    dept_no: str | None = None
    effective_date: str | None = None

    def to_dict(self) -> dict:
        return {
            "emp_no": self.emp_no,
            "dept_no": self.dept_no,
            "effective_date": self.effective_date,
        }


def error_envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    context: ErrorContext | None = None,
    **extra,
) -> dict:
    """The one REST error shape shared by rejections, raised errors and handlers."""
    ctx = context or ErrorContext()
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            "timestamp": ctx.timestamp.isoformat(),
            "context": ctx.to_dict(),
            **extra,
        }
    }


# ─── Promotion Rejections (400/404) ─────────────────────────────

class ErrorKind(str, Enum):
    """Every way a promotion request can be refused.

    The value is the stable wire identifier; category and status are
    derived so the transport layer never re-derives them.
    """
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    INVALID_SALARY = "INVALID_SALARY"
    INVALID_TITLE_LENGTH = "INVALID_TITLE_LENGTH"
    MALFORMED_DATE = "MALFORMED_DATE"
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    DEPARTMENT_NOT_FOUND = "DEPARTMENT_NOT_FOUND"
    EMPLOYEE_NOT_CURRENT = "EMPLOYEE_NOT_CURRENT"
    NO_CHANGE_REQUESTED = "NO_CHANGE_REQUESTED"
    PROMOTION_BEFORE_HIRE = "PROMOTION_BEFORE_HIRE"
    DUPLICATE_PROMOTION_DATE = "DUPLICATE_PROMOTION_DATE"
    DEPARTMENT_REENTRY = "DEPARTMENT_REENTRY"
    HISTORY_CONFLICT = "HISTORY_CONFLICT"

    @property
    def category(self) -> ErrorCategory:
        if self in _STRUCTURAL_KINDS:
            return ErrorCategory.VALIDATION
        if self in _NOT_FOUND_KINDS:
            return ErrorCategory.RESOURCE_NOT_FOUND
        return ErrorCategory.BUSINESS_RULE

    @property
    def http_status(self) -> int:
        return 404 if self in _NOT_FOUND_KINDS else 400

    @property
    def is_not_found(self) -> bool:
        return self in _NOT_FOUND_KINDS


_STRUCTURAL_KINDS = frozenset({
    ErrorKind.MALFORMED_REQUEST,
    ErrorKind.INVALID_SALARY,
    ErrorKind.INVALID_TITLE_LENGTH,
    ErrorKind.MALFORMED_DATE,
})

_NOT_FOUND_KINDS = frozenset({
    ErrorKind.EMPLOYEE_NOT_FOUND,
    ErrorKind.DEPARTMENT_NOT_FOUND,
})


@dataclass(frozen=True)
class Rejection:
    """A refused promotion: which rule failed and a human-readable reason."""
    kind: ErrorKind
    message: str

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def to_response(self, context: ErrorContext | None = None) -> dict:
        """Convert to standardized REST error response."""
        return error_envelope(
            self.code, self.message, self.kind.category,
            ErrorSeverity.ERROR, context,
        )


# ─── Raised Errors ──────────────────────────────────────────────

class TenureError(Exception):
    """Base exception for all Tenure infrastructure and read-side errors."""

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
        return error_envelope(
            self.code, self.message, self.category, self.severity, self.context,
        )


class ResourceNotFoundError(TenureError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class DatabaseError(TenureError):
    """Database operation failed; the surrounding transaction was rolled back."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class ConcurrencyError(TenureError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
