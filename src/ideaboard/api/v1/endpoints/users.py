# src/ideaboard/api/v1/endpoints/users.py
"""User profile endpoints."""

from fastapi import APIRouter

from ideaboard.core.errors import ForbiddenError, NotFoundError, ValidationError
from ideaboard.schemas.idea import IdeaCollection
from ideaboard.schemas.user import PublicUser, UserProfile, UserUpdate
from ideaboard.services import idea_service, user_service

from ..dependencies import CurrentUserDep, SessionDep, require_uuid

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserProfile, summary="Get a user profile")
async def get_user_profile(user_id: str, db: SessionDep) -> UserProfile:
    """Return a user's public fields with idea and feedback counts."""
    require_uuid(user_id, "id")
    profile = user_service.get_user_profile(db, user_id)
    if profile is None:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")
    return profile


@router.put("/{user_id}", response_model=PublicUser, summary="Update your profile")
async def update_user_profile(
    user_id: str,
    payload: UserUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PublicUser:
    """Change the authenticated user's username and/or email."""
    require_uuid(user_id, "id")
    if user_id != current_user.id:
        raise ForbiddenError(
            "You can only update your own profile", code="FORBIDDEN_RESOURCE"
        )
    if payload.username is None and payload.email is None:
        raise ValidationError("No valid fields to update")
    return user_service.update_user(db, user_id, payload)


@router.get("/{user_id}/ideas", response_model=IdeaCollection, summary="List a user's ideas")
async def list_user_ideas(user_id: str, db: SessionDep) -> IdeaCollection:
    """Return every idea the user has written, newest first."""
    require_uuid(user_id, "userId")
    return IdeaCollection(ideas=idea_service.get_user_ideas(db, user_id))
