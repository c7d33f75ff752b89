# src/idea_board/api/v1/endpoints/comments.py
"""Comment reaction endpoints for the Idea Board API."""

from fastapi import APIRouter

from idea_board.api.v1.dependencies import CommentServiceDep, CurrentUserDep
from idea_board.schemas.comment import ReactionToggle, ReactionToggleResponse

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("/{comment_id}/reactions", response_model=ReactionToggleResponse)
async def toggle_reaction(
    comment_id: str,
    payload: ReactionToggle,
    current_user: CurrentUserDep,
    service: CommentServiceDep,
) -> ReactionToggleResponse:
    """Toggle the caller's emoji reaction on a comment.

    Each emoji is toggled independently; a user may hold several different
    emojis on the same comment.
    """
    added = service.toggle_reaction(comment_id, payload.emoji, current_user)
    return ReactionToggleResponse(added=added, emoji=(payload.emoji or "").strip())
