# src/ideaboard/api/v1/endpoints/ratings.py
"""Rating endpoints nested under ideas."""

from fastapi import APIRouter, status

from ideaboard.schemas.rating import RatingOut, RatingScore, RatingStats
from ideaboard.services import rating_service

from ..dependencies import CurrentUserDep, SessionDep, require_uuid

router = APIRouter(prefix="/ideas", tags=["ratings"])


@router.post(
    "/{idea_id}/ratings",
    status_code=status.HTTP_201_CREATED,
    response_model=RatingOut,
    summary="Rate an idea",
)
async def create_rating(
    idea_id: str,
    payload: RatingScore,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> RatingOut:
    """Record the authenticated user's first rating of an idea."""
    require_uuid(idea_id, "ideaId")
    return rating_service.create_rating(db, current_user.id, idea_id, payload)


@router.put("/{idea_id}/ratings", response_model=RatingOut, summary="Change a rating")
async def update_rating(
    idea_id: str,
    payload: RatingScore,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> RatingOut:
    """Replace the authenticated user's existing rating of an idea."""
    require_uuid(idea_id, "ideaId")
    return rating_service.update_rating(db, current_user.id, idea_id, payload)


@router.get(
    "/{idea_id}/ratings/average",
    response_model=RatingStats,
    summary="Average rating and count",
)
async def rating_stats(idea_id: str, db: SessionDep) -> RatingStats:
    """Return the rounded average (null when unrated) and the number of ratings."""
    require_uuid(idea_id, "ideaId")
    return rating_service.get_rating_stats(db, idea_id)
