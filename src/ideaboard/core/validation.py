"""Field-level validation rules and input sanitizers.

The predicates are pure: they take a raw value and answer whether it satisfies
the rule. The ``check_*`` helpers sanitize a group of related fields, run the
predicates and raise a single :class:`ValidationError` listing every failing
field.
"""

from __future__ import annotations

import re
from typing import Any

from ideaboard.core.errors import FieldError, ValidationError

__all__ = [
    "IDEA_TITLE_MIN",
    "IDEA_TITLE_MAX",
    "IDEA_DESCRIPTION_MIN",
    "IDEA_DESCRIPTION_MAX",
    "FEEDBACK_CONTENT_MIN",
    "RATING_MIN",
    "RATING_MAX",
    "is_valid_email",
    "is_valid_password",
    "is_valid_username",
    "is_valid_idea_title",
    "is_valid_idea_description",
    "is_valid_feedback_content",
    "is_valid_rating_score",
    "is_valid_uuid",
    "sanitize_string",
    "sanitize_email",
    "check_registration",
    "check_idea",
    "check_feedback",
    "check_rating_score",
]

IDEA_TITLE_MIN = 5
IDEA_TITLE_MAX = 100
IDEA_DESCRIPTION_MIN = 10
IDEA_DESCRIPTION_MAX = 5000
FEEDBACK_CONTENT_MIN = 10
USERNAME_MIN = 3
USERNAME_MAX = 30
PASSWORD_MIN = 8
# bcrypt only accepts the first 72 bytes of a password.
PASSWORD_MAX_BYTES = 72
RATING_MIN = 1
RATING_MAX = 5

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
# Control characters other than tab, newline and carriage return.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def sanitize_string(value: Any) -> str:
    """Strip control characters and surrounding whitespace."""
    if not isinstance(value, str):
        return ""
    return _CONTROL_RE.sub("", value).strip()


def sanitize_email(value: Any) -> str:
    """Normalize an email address for storage and lookup."""
    return sanitize_string(value).lower()


def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str) or not email:
        return False
    return _EMAIL_RE.match(email.strip()) is not None


def _password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > PASSWORD_MAX_BYTES


def is_valid_password(password: Any) -> bool:
    """At least 8 characters and at most 72 UTF-8 bytes, with one letter and one digit."""
    if not isinstance(password, str) or len(password) < PASSWORD_MIN:
        return False
    if _password_too_long(password):
        return False
    has_letter = any(ch.isascii() and ch.isalpha() for ch in password)
    has_digit = any(ch in "0123456789" for ch in password)
    return has_letter and has_digit


def is_valid_username(username: Any) -> bool:
    """3-30 characters drawn from letters, digits and underscores."""
    if not isinstance(username, str):
        return False
    trimmed = username.strip()
    if not USERNAME_MIN <= len(trimmed) <= USERNAME_MAX:
        return False
    return _USERNAME_RE.match(trimmed) is not None


def is_valid_idea_title(title: Any) -> bool:
    if not isinstance(title, str):
        return False
    return IDEA_TITLE_MIN <= len(title.strip()) <= IDEA_TITLE_MAX


def is_valid_idea_description(description: Any) -> bool:
    if not isinstance(description, str):
        return False
    return IDEA_DESCRIPTION_MIN <= len(description.strip()) <= IDEA_DESCRIPTION_MAX


def is_valid_feedback_content(content: Any) -> bool:
    if not isinstance(content, str):
        return False
    return len(content.strip()) >= FEEDBACK_CONTENT_MIN


def is_valid_rating_score(score: Any) -> bool:
    # bool is an int subclass; True must not count as a score of 1.
    if isinstance(score, bool) or not isinstance(score, int):
        return False
    return RATING_MIN <= score <= RATING_MAX


def is_valid_uuid(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return _UUID_RE.match(value) is not None


def check_registration(username: Any, email: Any, password: Any) -> tuple[str, str]:
    """Validate registration input and return the sanitized username and email."""
    errors: list[FieldError] = []
    if not username:
        errors.append({"field": "username", "message": "Username is required"})
    elif not is_valid_username(sanitize_string(username)):
        errors.append(
            {
                "field": "username",
                "message": "Username must be 3-30 characters and contain only "
                "letters, numbers, and underscores",
            }
        )
    if not email:
        errors.append({"field": "email", "message": "Email is required"})
    elif not is_valid_email(sanitize_email(email)):
        errors.append({"field": "email", "message": "Invalid email format"})
    if not password:
        errors.append({"field": "password", "message": "Password is required"})
    elif isinstance(password, str) and _password_too_long(password):
        errors.append(
            {
                "field": "password",
                "message": "Password cannot be longer than 72 bytes",
            }
        )
    elif not is_valid_password(password):
        errors.append(
            {
                "field": "password",
                "message": "Password must be at least 8 characters and contain "
                "at least one letter and one number",
            }
        )
    if errors:
        raise ValidationError.for_fields(errors)
    return sanitize_string(username), sanitize_email(email)


def check_idea(title: Any, description: Any) -> tuple[str, str]:
    """Validate idea input and return the sanitized title and description."""
    clean_title = sanitize_string(title)
    clean_description = sanitize_string(description)
    errors: list[FieldError] = []
    if not clean_title:
        errors.append({"field": "title", "message": "Title is required"})
    elif not is_valid_idea_title(clean_title):
        errors.append(
            {"field": "title", "message": "Title must be between 5 and 100 characters"}
        )
    if not clean_description:
        errors.append({"field": "description", "message": "Description is required"})
    elif not is_valid_idea_description(clean_description):
        errors.append(
            {
                "field": "description",
                "message": "Description must be between 10 and 5000 characters",
            }
        )
    if errors:
        raise ValidationError.for_fields(errors)
    return clean_title, clean_description


def check_feedback(content: Any) -> str:
    """Validate feedback content and return it sanitized."""
    clean = sanitize_string(content)
    if not clean:
        raise ValidationError.for_fields([{"field": "content", "message": "Content is required"}])
    if not is_valid_feedback_content(clean):
        raise ValidationError.for_fields(
            [{"field": "content", "message": "Content must be at least 10 characters"}]
        )
    return clean


def check_rating_score(score: Any) -> int:
    if score is None:
        raise ValidationError.for_fields([{"field": "score", "message": "Score is required"}])
    if not is_valid_rating_score(score):
        raise ValidationError.for_fields(
            [{"field": "score", "message": "Score must be an integer between 1 and 5"}]
        )
    return int(score)
