# src/ideaboard/api/v1/endpoints/feedback.py
"""Feedback endpoints nested under ideas."""

from fastapi import APIRouter, status

from ideaboard.schemas.feedback import FeedbackCreate, FeedbackOut, FeedbackWithAuthor
from ideaboard.services import feedback_service

from ..dependencies import CurrentUserDep, SessionDep, require_uuid

router = APIRouter(prefix="/ideas", tags=["feedback"])


@router.post(
    "/{idea_id}/feedback",
    status_code=status.HTTP_201_CREATED,
    response_model=FeedbackOut,
    summary="Leave feedback on an idea",
)
async def create_feedback(
    idea_id: str,
    payload: FeedbackCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FeedbackOut:
    """Create feedback from the authenticated user on someone else's idea."""
    require_uuid(idea_id, "ideaId")
    return feedback_service.create_feedback(db, current_user.id, idea_id, payload)


@router.get(
    "/{idea_id}/feedback",
    response_model=list[FeedbackWithAuthor],
    summary="List feedback on an idea",
)
async def list_feedback(idea_id: str, db: SessionDep) -> list[FeedbackWithAuthor]:
    """Return all feedback on an idea, newest first."""
    require_uuid(idea_id, "ideaId")
    return feedback_service.get_feedback_by_idea(db, idea_id)
