"""Endpoints about the signed-in user."""

from __future__ import annotations

from fastapi import APIRouter

from idea_board.api.v1.dependencies import CurrentUserDep, SessionDep
from idea_board.schemas.user import AuthorOut, UserStats
from idea_board.services.user_service import get_user_stats

router = APIRouter(prefix="/user", tags=["users"])


@router.get("/me", response_model=AuthorOut)
async def get_me(current_user: CurrentUserDep) -> AuthorOut:
    """Return the display fields of the caller."""
    return AuthorOut.model_validate(current_user)


@router.get("/stats", response_model=UserStats)
async def get_stats(current_user: CurrentUserDep, db: SessionDep) -> UserStats:
    """Return ideas authored and votes/comments received by the caller."""
    return UserStats.model_validate(get_user_stats(db, current_user))
