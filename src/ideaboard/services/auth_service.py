"""Registration, login and token resolution."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ideaboard.core import security
from ideaboard.core.errors import (
    AuthenticationError,
    ConflictError,
    FieldError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from ideaboard.core.validation import check_registration, is_valid_email, sanitize_email
from ideaboard.db.session import transaction
from ideaboard.db.time import utcnow
from ideaboard.repositories.user_repo import UserRepository
from ideaboard.schemas.user import (
    AuthResponse,
    LoginRequest,
    PublicUser,
    RegisterRequest,
    to_public_user,
)

__all__ = ["register", "login", "resolve_token"]

logger = logging.getLogger(__name__)


def register(db: Session, data: RegisterRequest) -> AuthResponse:
    """Create an account and return it with a fresh access token.

    Raises:
        ValidationError: If any of username, email or password is invalid.
        ConflictError: If the email or username is already registered.
    """
    username, email = check_registration(data.username, data.email, data.password)
    repo = UserRepository(db)

    with transaction(db):
        existing = repo.find_by_email_or_username(email, username)
        if existing is not None:
            if existing.email == email:
                raise ConflictError("Email already registered", code="USER_EXISTS")
            raise ConflictError("Username already taken", code="USER_EXISTS")
        try:
            user = repo.create(
                username=username,
                email=email,
                password_hash=security.hash_password(data.password),
                now=utcnow(),
            )
        except IntegrityError as err:
            raise ConflictError("Username or email already in use", code="USER_EXISTS") from err
        user_id = user.id

    created = repo.get_by_id(user_id)
    if created is None:
        logger.error("User %s missing immediately after insert", user_id)
        raise InternalError("Failed to create user")

    logger.info("Registered user %s (%s)", user_id, username)
    return AuthResponse(user=to_public_user(created), token=security.create_access_token(user_id))


def login(db: Session, data: LoginRequest) -> AuthResponse:
    """Exchange an email and password for an access token."""
    email = sanitize_email(data.email)
    errors: list[FieldError] = []
    if not email:
        errors.append({"field": "email", "message": "Email is required"})
    elif not is_valid_email(email):
        errors.append({"field": "email", "message": "Invalid email format"})
    if not data.password:
        errors.append({"field": "password", "message": "Password is required"})
    if errors:
        raise ValidationError.for_fields(errors)

    user = UserRepository(db).get_by_email(email)
    if user is None or not security.verify_password(data.password, user.password_hash):
        raise AuthenticationError(
            "Invalid email or password", code="AUTH_INVALID_CREDENTIALS"
        )
    return AuthResponse(user=to_public_user(user), token=security.create_access_token(user.id))


def resolve_token(db: Session, token: str) -> PublicUser:
    """Return the user a bearer token was issued to.

    Raises:
        AuthenticationError: If the token is invalid or expired.
        NotFoundError: If the token's user no longer exists.
    """
    user_id = security.decode_access_token(token)
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")
    return to_public_user(user)
