# src/ideaboard/api/v1/endpoints/auth.py
"""Registration and login endpoints."""

from fastapi import APIRouter, status

from ideaboard.schemas.user import AuthResponse, LoginRequest, PublicUser, RegisterRequest
from ideaboard.services import auth_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    summary="Register a new account",
)
async def register(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return it with an access token."""
    return auth_service.register(db, payload)


@router.post("/login", response_model=AuthResponse, summary="Log in with email and password")
async def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Exchange credentials for an access token."""
    return auth_service.login(db, payload)


@router.get("/me", summary="Return the authenticated user")
async def me(current_user: CurrentUserDep) -> dict[str, PublicUser]:
    """Return the user the bearer token belongs to."""
    return {"user": current_user}
