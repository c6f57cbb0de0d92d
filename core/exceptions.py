"""Custom exception classes for the nutrition assistant.

Defines domain-specific exceptions raised by the AI orchestration layer and
the store, handled consistently by the FastAPI exception handlers. The three
AI failure kinds (configuration, transport, parse) drive the per-operation
fallback policy in `services.ai_orchestrator`.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Profile', 'MealPlan').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class ConfigurationError(AppException):
    """Exception raised when application configuration is invalid.

    A missing completion credential is reported this way. It is fatal and is
    never masked by a fallback.
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)


class TransportError(AppException):
    """Exception raised when the completion service cannot be reached.

    Covers HTTP-level failures, connection errors and deadline expiry.
    """

    def __init__(self, message: str, operation: Optional[str] = None, cause: Optional[str] = None):
        details = {}
        if operation:
            details["operation"] = operation
        if cause:
            details["cause"] = cause
        super().__init__(message, status_code=502, details=details)


class ParseError(AppException):
    """Exception raised when a model reply does not match the expected schema."""

    def __init__(self, message: str, schema: Optional[str] = None):
        details = {"schema": schema} if schema else {}
        super().__init__(message, status_code=502, details=details)
