"""Typed failures raised by the service layer.

Services never return HTTP responses. They raise one of the errors below and
the API layer translates each kind into a status code and a JSON body of the
form ``{"error": {"code": ..., "message": ..., "details": ...}}``.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ServiceError",
    "ValidationError",
    "InvalidReferenceError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
    "FieldError",
]

FieldError = dict[str, str]


class ServiceError(Exception):
    """Base class for every failure the core communicates to its callers."""

    status_code: int = 500
    default_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: list[FieldError] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Return the error payload used in API responses."""
        body: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return {"error": body}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(ServiceError):
    """A field failed one of the validation rules; caller-correctable."""

    status_code = 400
    default_code = "VALIDATION_FAILED"

    @classmethod
    def for_fields(cls, errors: list[FieldError]) -> ValidationError:
        """Build a single error out of per-field failures."""
        if len(errors) == 1:
            return cls(errors[0]["message"], details=errors)
        return cls("Validation failed", details=errors)


class InvalidReferenceError(ServiceError):
    """A foreign key pointed at a row that does not exist."""

    status_code = 400
    default_code = "INVALID_REFERENCE"


class AuthenticationError(ServiceError):
    """Missing, malformed or expired credentials."""

    status_code = 401
    default_code = "AUTH_TOKEN_INVALID"


class ForbiddenError(ServiceError):
    """The requester may not act on the resource (e.g. self-rating)."""

    status_code = 403
    default_code = "FORBIDDEN_RESOURCE"


class NotFoundError(ServiceError):
    """A referenced idea, user or rating does not exist."""

    status_code = 404
    default_code = "NOT_FOUND"


class ConflictError(ServiceError):
    """The write collides with existing state (duplicate rating, taken username)."""

    status_code = 409
    default_code = "CONFLICT"


class InternalError(ServiceError):
    """The store returned nothing for a row that was just written."""

    status_code = 500
    default_code = "INTERNAL_ERROR"
