"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ideaboard.core.errors import AuthenticationError, ValidationError
from ideaboard.core.validation import is_valid_uuid
from ideaboard.db.session import get_db
from ideaboard.schemas.user import PublicUser
from ideaboard.services import auth_service

# HTTP Bearer scheme for JWT authentication; missing headers are reported by
# get_current_user so they share the error envelope of every other failure.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> PublicUser:
    """Get the current authenticated user from a bearer token.

    Raises:
        AuthenticationError: If the header is missing, malformed or the token is invalid.
        NotFoundError: If the token refers to a user that no longer exists.
    """
    if credentials is None:
        if request.headers.get("Authorization"):
            raise AuthenticationError(
                "Invalid token format. Expected: Bearer <token>",
                code="AUTH_TOKEN_INVALID",
            )
        raise AuthenticationError(
            "No authentication token provided",
            code="AUTH_TOKEN_MISSING",
        )
    user = auth_service.resolve_token(db, credentials.credentials)
    request.state.user_id = user.id
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[PublicUser, Depends(get_current_user)]


def require_uuid(value: str, name: str) -> str:
    """Reject path identifiers that are not UUIDs."""
    if not is_valid_uuid(value):
        raise ValidationError(
            f"Invalid {name} format",
            details=[{"field": name, "message": f"{name} must be a UUID"}],
        )
    return value
