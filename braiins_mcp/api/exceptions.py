"""
Custom exceptions for the Braiins Pool API integration.

Every error carries a machine-readable ErrorCode, an HTTP-equivalent
status code and optional details, and can be rendered as a JSON-safe
payload for MCP error responses.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Error categories, grouped by HTTP-equivalent class."""

    # Client-side (4xx equivalent)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"

    # Server/API (5xx equivalent)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    API_ERROR = "API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"

    # Configuration
    CONFIG_ERROR = "CONFIG_ERROR"


class BraiinsError(Exception):
    """
    Base exception for all Braiins MCP errors.

    Attributes:
        message: Human-readable description
        code: ErrorCode category
        status_code: HTTP-equivalent status
        details: Optional structured context (url, response body, ...)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Serializable error payload for tool responses.

        Example:
            >>> BraiinsError("boom").to_dict()
            {'error': True, 'code': 'INTERNAL_ERROR', 'message': 'boom'}
        """
        payload: dict[str, Any] = {
            "error": True,
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(BraiinsError):
    """Raised when caller input is malformed. Never retried."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, 400, details)


_STATUS_MAP: dict[int, tuple[ErrorCode, str]] = {
    400: (ErrorCode.BAD_REQUEST, "Bad request to Braiins API"),
    401: (ErrorCode.UNAUTHORIZED, "Invalid or missing API token"),
    403: (ErrorCode.FORBIDDEN, "Access forbidden"),
    404: (ErrorCode.NOT_FOUND, "Resource not found"),
    429: (ErrorCode.RATE_LIMITED, "Rate limit exceeded"),
    500: (ErrorCode.API_ERROR, "Braiins API internal error"),
    502: (ErrorCode.API_ERROR, "Braiins API bad gateway"),
    503: (ErrorCode.API_ERROR, "Braiins API unavailable"),
    504: (ErrorCode.TIMEOUT_ERROR, "Braiins API timeout"),
}


class BraiinsAPIError(BraiinsError):
    """
    Raised when the Braiins Pool API answers with an error response.

    Attributes:
        original_status: Upstream HTTP status code
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.API_ERROR,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, status_code, details)
        self.original_status = status_code

    @classmethod
    def from_http_status(
        cls,
        status: int,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> "BraiinsAPIError":
        """
        Map an upstream HTTP status to a typed error.

        Args:
            status: HTTP status code returned by the API
            message: Upstream error message (overrides the default if non-empty)
            details: Request URL, response body, ...

        Example:
            >>> BraiinsAPIError.from_http_status(404).code
            <ErrorCode.NOT_FOUND: 'NOT_FOUND'>
        """
        code, default_message = _STATUS_MAP.get(
            status, (ErrorCode.API_ERROR, f"Braiins API error (status: {status})")
        )
        return cls(message or default_message, code, status, details)


class NetworkError(BraiinsError):
    """
    Raised when the Braiins API cannot be reached at all.

    Connection refused, DNS failure and other no-response conditions
    end up here after retries are exhausted.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.NETWORK_ERROR,
        status_code: int = 503,
    ) -> None:
        super().__init__(message, code, status_code, details)


class RequestTimeoutError(NetworkError):
    """Raised when upstream requests keep exceeding the configured timeout."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, details, ErrorCode.TIMEOUT_ERROR, 504)


class ConfigError(BraiinsError):
    """Invalid server configuration."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, ErrorCode.CONFIG_ERROR, 500, details)


def is_braiins_error(error: BaseException) -> bool:
    return isinstance(error, BraiinsError)


def to_braiins_error(error: BaseException) -> BraiinsError:
    """
    Convert any exception to a BraiinsError.

    BraiinsErrors pass through unchanged; anything else becomes an
    INTERNAL_ERROR recording the original exception type.
    """
    if isinstance(error, BraiinsError):
        return error

    return BraiinsError(
        str(error) or "An unknown error occurred",
        ErrorCode.INTERNAL_ERROR,
        500,
        {"original_error": type(error).__name__},
    )
