"""Error Hierarchy — typed exceptions for validation failures and HTTP errors.

Invariants:
    - Every validation failure is a ValidationTypeError carrying the full context path
    - ApiError carries an explicit HTTP status and a JSON-serializable body
    - Validators never translate their own failures into HTTP errors (caller responsibility)

Design Decisions:
    - ValidationTypeError subclasses TypeError: a wrong shape is a type error to callers
      that know nothing about featurekit
    - ApiError inside the FeaturekitError hierarchy: one handler covers every HTTP-aware error
"""

from enum import Enum
from typing import Any

from featurekit.core import json_codec


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CLIENT = "client"
    INTERNAL = "internal"


class FeaturekitError(Exception):
    """Base exception for all HTTP-aware featurekit errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> Any:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
            }
        }


class ApiError(FeaturekitError):
    """Exception that holds a HTTP status and body, sent verbatim by the adapter."""

    def __init__(self, status: int, body: Any, message: str | None = None):
        if message is None:
            message = json_codec.dumps(body)
        if status >= 500:
            category, severity = ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL
        else:
            category, severity = ErrorCategory.CLIENT, ErrorSeverity.WARNING
        super().__init__(message, "API_ERROR", category, severity, status)
        self.status = status
        self.body = body

    def to_response(self) -> Any:
        return self.body


class ValidationTypeError(TypeError):
    """A value did not have the expected shape at `path`."""

    def __init__(
        self,
        context: list[str],
        expected: str,
        found: Any,
        show_type: bool = True,
    ):
        self.path = ".".join(context)
        self.expected = expected
        self.found = found
        message = f"Expected '{self.path}' to be {expected}, but found: {found}"
        if show_type:
            message += f" ({type(found).__name__})"
        super().__init__(message)
        self.message = message

    def to_api_error(self, status: int = 400) -> ApiError:
        """Wrap this failure for callers that want client-error semantics."""
        return ApiError(
            status, {"error": self.message, "path": self.path}, self.message,
        )
