"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Every failure a command can hit is an RpaasError; the CLI layer turns it
into an error message on stderr and a non-zero exit code.
"""

from typing import Any


class RpaasError(Exception):
    """Base exception for all rpaasv2 errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(RpaasError):
    """Raised when flag values fail validation, before any request is sent."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ConfigurationError(RpaasError):
    """Raised when the client target or the settings file is unusable."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")


class ApiError(RpaasError):
    """
    Raised when the RPaaS API answers with an error status.

    The message is the HTTP status line (e.g. "404 Not Found"). The message
    decoded from the error body, if any, is kept in ``body_message``.
    """

    def __init__(
        self,
        status_code: int,
        reason: str,
        body_message: str | None = None,
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body_message = body_message
        self.body = body
        super().__init__(f"{status_code} {reason}", code="SYS_EXTERNAL_SERVICE_ERROR")


class CommandError(RpaasError):
    """Raised when a command fails; carries the operation-specific prefix."""

    def __init__(self, operation: str, cause: Exception) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}", code="CMD_FAILED")
