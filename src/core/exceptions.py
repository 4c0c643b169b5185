"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the session and data layer."""

    # Authentication errors
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    SESSION_EXPIRED = "SESSION_EXPIRED"

    # Timeouts
    TIMEOUT = "TIMEOUT"

    # Remote service errors
    REMOTE_ERROR = "REMOTE_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
        status_code: int | None = 401,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
        )


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair was rejected."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_CREDENTIALS,
            status_code=400,
        )


class SessionExpiredError(AuthenticationError):
    """Persisted session could not be refreshed."""

    def __init__(self, message: str = "Session expired") -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.SESSION_EXPIRED,
        )


class OperationTimeoutError(AppException):
    """An awaited operation exceeded its time bound."""

    def __init__(self, operation: str, timeout: float, message: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.TIMEOUT,
            message=message or f"{operation} timed out after {timeout:g}s",
            details={"operation": operation, "timeout": timeout},
        )


class RemoteServiceError(AppException):
    """The remote persistence or auth service rejected a call."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any | None = None,
        error_code: ErrorCode = ErrorCode.REMOTE_ERROR,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
            details=details,
        )
