# src/ideaboard/api/v1/endpoints/ideas.py
"""Idea submission and listing endpoints."""

from fastapi import APIRouter, Query, status

from ideaboard.core.errors import NotFoundError, ValidationError
from ideaboard.core.settings import settings
from ideaboard.core.validation import RATING_MAX, RATING_MIN
from ideaboard.repositories.idea_repo import IdeaSort
from ideaboard.schemas.idea import (
    IdeaCreate,
    IdeaDetailEnvelope,
    IdeaEnvelope,
    IdeaListResponse,
)
from ideaboard.services import idea_service

from ..dependencies import CurrentUserDep, SessionDep, require_uuid

router = APIRouter(prefix="/ideas", tags=["ideas"])

_SORT_VALUES = ", ".join(option.value for option in IdeaSort)


def _check_listing_params(
    sort_by: str,
    min_rating: float | None,
    max_rating: float | None,
) -> IdeaSort:
    if sort_by not in {option.value for option in IdeaSort}:
        raise ValidationError(f"Invalid sortBy parameter. Must be one of: {_SORT_VALUES}")
    if min_rating is not None and not RATING_MIN <= min_rating <= RATING_MAX:
        raise ValidationError("minRating must be between 1 and 5")
    if max_rating is not None and not RATING_MIN <= max_rating <= RATING_MAX:
        raise ValidationError("maxRating must be between 1 and 5")
    if min_rating is not None and max_rating is not None and min_rating > max_rating:
        raise ValidationError("minRating cannot be greater than maxRating")
    return IdeaSort(sort_by)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=IdeaEnvelope,
    summary="Submit a new idea",
)
async def create_idea(
    payload: IdeaCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> IdeaEnvelope:
    """Create an idea owned by the authenticated user."""
    idea = idea_service.create_idea(db, current_user.id, payload)
    return IdeaEnvelope(idea=idea)


@router.get("", response_model=IdeaListResponse, summary="List ideas")
async def list_ideas(
    db: SessionDep,
    page: int = Query(1),
    limit: int = Query(settings.default_page_size),
    sort_by: str = Query(IdeaSort.DATE.value, alias="sortBy"),
    min_rating: float | None = Query(None, alias="minRating"),
    max_rating: float | None = Query(None, alias="maxRating"),
    search: str | None = Query(None),
) -> IdeaListResponse:
    """Return a page of ideas sorted and filtered as requested."""
    sort = _check_listing_params(sort_by, min_rating, max_rating)
    return idea_service.get_ideas(
        db,
        page=page,
        limit=limit,
        sort_by=sort,
        min_rating=min_rating,
        max_rating=max_rating,
        search=search,
    )


@router.get("/{idea_id}", response_model=IdeaDetailEnvelope, summary="Get one idea")
async def get_idea(idea_id: str, db: SessionDep) -> IdeaDetailEnvelope:
    """Return an idea with engagement metrics and all of its feedback."""
    require_uuid(idea_id, "id")
    idea = idea_service.get_idea_by_id(db, idea_id)
    if idea is None:
        raise NotFoundError("Idea not found", code="IDEA_NOT_FOUND")
    return IdeaDetailEnvelope(idea=idea)
