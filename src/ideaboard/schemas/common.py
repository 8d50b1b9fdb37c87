"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys.

    Fields are declared in snake_case and accepted under either spelling.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuthorSummary(CamelModel):
    """Public identity of the user who wrote an idea or feedback entry."""

    id: str
    username: str


class FieldErrorDetail(BaseModel):
    field: str
    message: str


class ErrorBody(BaseModel):
    code: str
    message: str
    details: list[FieldErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    error: ErrorBody
