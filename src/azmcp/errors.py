"""Error vocabulary shared by the bridge and its collaborators."""

from __future__ import annotations

from enum import Enum
from typing import NoReturn, TypedDict


class ErrorKind(str, Enum):
    """Coarse classification tag carried by every collaborator error."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    REQUEST_FAILED = "request_failed"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    UNHANDLED = "unhandled"


class MCPErrorPayload(TypedDict):
    """Structured JSON payload for MCP errors."""

    error: dict[str, object | None]


class MCPError(Exception):
    """Transport-level error containing a JSON-friendly payload."""

    def __init__(
        self, error_type: str, message: str, details: object | None = None
    ) -> None:
        """Create a structured MCP error payload."""
        super().__init__(message)
        self.error: MCPErrorPayload = {
            "error": {
                "type": error_type,
                "message": message,
                "details": details,
            }
        }

    def to_dict(self) -> MCPErrorPayload:
        """Return the structured error payload."""
        return self.error


def raise_mcp_error(
    error_type: str, message: str, details: object | None = None
) -> NoReturn:
    """Raise an :class:`MCPError` with a structured payload."""
    raise MCPError(error_type=error_type, message=message, details=details)


class ServiceError(Exception):
    """Failure raised by a collaborator while performing a cloud operation.

    Attributes:
        kind: Classification tag consulted by the error classifier.
        details: Optional extra context supplied by the collaborator.

    """

    kind: ErrorKind = ErrorKind.UNHANDLED

    def __init__(self, message: str, details: object | None = None) -> None:
        """Create a collaborator error with an optional detail payload."""
        super().__init__(message)
        self.details = details


class ValidationError(ServiceError):
    """Input rejected before or by a collaborator."""

    kind = ErrorKind.VALIDATION


class AuthenticationError(ServiceError):
    """Credential acquisition failed."""

    kind = ErrorKind.AUTHENTICATION


class AuthorizationError(ServiceError):
    """The caller is authenticated but lacks permission."""

    kind = ErrorKind.AUTHORIZATION


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class RequestFailedError(ServiceError):
    """A provider request failed with its own HTTP-like status code."""

    kind = ErrorKind.REQUEST_FAILED

    def __init__(
        self, message: str, status: int, details: object | None = None
    ) -> None:
        """Create a failure that carries the provider's status code."""
        super().__init__(message, details)
        self.status = status


class ServiceUnavailableError(ServiceError):
    """The provider endpoint could not be reached."""

    kind = ErrorKind.UNAVAILABLE


def error_kind_of(exc: BaseException) -> ErrorKind:
    """Map any exception onto an :class:`ErrorKind` tag."""
    if isinstance(exc, ServiceError):
        return exc.kind
    if isinstance(exc, TimeoutError):
        return ErrorKind.TIMEOUT
    if isinstance(exc, ConnectionError):
        return ErrorKind.UNAVAILABLE
    if isinstance(exc, PermissionError):
        return ErrorKind.AUTHORIZATION
    return ErrorKind.UNHANDLED
