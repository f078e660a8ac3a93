"""Error taxonomy for the Kirim.Email SMTP API client.

Every failed call is classified into an ``ErrorKind`` and surfaced as an
``ApiError`` subclass. Classification is a pure function of the HTTP status
and the (possibly unparseable) response body.
"""

from enum import Enum
from typing import Any, Optional

import requests


class ErrorKind(str, Enum):
    """Classification of a failed call."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    SERVER = "server"
    PROTOCOL = "protocol"
    TIMEOUT = "timeout"
    NETWORK = "network"
    API = "api"


class ApiError(Exception):
    """Base class for every error raised by the client."""

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[dict[str, list[str]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors

    def has_errors(self) -> bool:
        """Whether field-level errors were returned."""
        return bool(self.errors)

    def error_messages(self) -> list[str]:
        """All field-level messages as one flat list, for display."""
        if not self.errors:
            return []
        messages: list[str] = []
        for field_messages in self.errors.values():
            messages.extend(field_messages)
        return messages

    def errors_for_field(self, field: str) -> list[str]:
        if not self.errors:
            return []
        return list(self.errors.get(field, []))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "errors": self.errors,
        }

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class ValidationError(ApiError):
    """Raised for 400 and 422 responses."""
    kind = ErrorKind.VALIDATION


class AuthenticationError(ApiError):
    """Raised for 401 and 403 responses."""
    kind = ErrorKind.AUTHENTICATION


class NotFoundError(ApiError):
    """Raised for 404 responses."""
    kind = ErrorKind.NOT_FOUND


class ServerError(ApiError):
    """Raised for 5xx responses."""
    kind = ErrorKind.SERVER


class ProtocolError(ApiError):
    """Raised when a success response carries a malformed payload."""
    kind = ErrorKind.PROTOCOL


class RequestTimeoutError(ApiError):
    """Raised when a call exceeds its configured timeout."""
    kind = ErrorKind.TIMEOUT


class NetworkError(ApiError):
    """Raised when no response was received at all."""
    kind = ErrorKind.NETWORK


_ERROR_CLASSES: dict[ErrorKind, type[ApiError]] = {
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.AUTHENTICATION: AuthenticationError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.SERVER: ServerError,
    ErrorKind.PROTOCOL: ProtocolError,
    ErrorKind.TIMEOUT: RequestTimeoutError,
    ErrorKind.NETWORK: NetworkError,
    ErrorKind.API: ApiError,
}


def kind_for_status(status: int) -> ErrorKind:
    """Map an HTTP error status to its ErrorKind."""
    if status in (400, 422):
        return ErrorKind.VALIDATION
    if status in (401, 403):
        return ErrorKind.AUTHENTICATION
    if status == 404:
        return ErrorKind.NOT_FOUND
    if status >= 500:
        return ErrorKind.SERVER
    return ErrorKind.API


def error_for(
    kind: ErrorKind,
    message: str,
    status_code: Optional[int] = None,
    errors: Optional[dict[str, list[str]]] = None,
) -> ApiError:
    """Build the exception instance for a kind."""
    error_cls = _ERROR_CLASSES.get(kind, ApiError)
    if kind != ErrorKind.VALIDATION:
        errors = None
    return error_cls(message, status_code=status_code, errors=errors)


def classify_error(status: int, body: Any, reason: Optional[str] = None) -> ApiError:
    """Classify an HTTP error response.

    Args:
        status: HTTP status code (>= 400).
        body: Parsed JSON body, or None when the body was not JSON.
        reason: HTTP status line text, used when the body carries no message.

    Returns:
        The most specific ApiError for the response.
    """
    kind = kind_for_status(status)
    message = None
    errors = None

    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        errors = _field_errors(body.get("errors"))

    if not message:
        message = reason or "Unknown API error"

    return error_for(kind, str(message), status_code=status, errors=errors)


def classify_transport_error(exc: BaseException) -> ApiError:
    """Classify an exception raised by the HTTP backend before a response arrived."""
    if isinstance(exc, (requests.Timeout, TimeoutError)):
        return RequestTimeoutError(f"Request timeout: {exc}")
    if isinstance(exc, (requests.RequestException, OSError)):
        return NetworkError(f"Network error: {exc}")
    return ApiError(f"Unexpected error: {exc}")


def _field_errors(raw: Any) -> Optional[dict[str, list[str]]]:
    if not isinstance(raw, dict) or not raw:
        return None
    errors: dict[str, list[str]] = {}
    for field, messages in raw.items():
        if isinstance(messages, list):
            errors[field] = messages
        else:
            errors[field] = [messages]
    return errors
