"""Application exception types."""

from typing import Any

from piring_sehat.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to the `{"error": ...}` payload."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def payload(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, details=self.details)


class ValidationError(ApiError):
    """Missing or malformed request input."""


class Unauthenticated(ApiError):
    """Missing or invalid credential, or a verified identity with no local user."""


class Forbidden(ApiError):
    """Authenticated, but neither the owner nor a privileged role."""


class NotFound(ApiError):
    """The addressed resource does not exist."""


class UpstreamFailure(ApiError):
    """The identity provider or the data store failed unexpectedly."""


STATUS_BY_ERROR: dict[type[ApiError], int] = {
    ValidationError: 400,
    Unauthenticated: 401,
    Forbidden: 403,
    NotFound: 404,
    UpstreamFailure: 500,
}


def status_code_for(exc: ApiError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return 500


__all__ = [
    "ApiError",
    "Forbidden",
    "NotFound",
    "STATUS_BY_ERROR",
    "Unauthenticated",
    "UpstreamFailure",
    "ValidationError",
    "status_code_for",
]
