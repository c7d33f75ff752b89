# src/idea_board/api/v1/endpoints/ideas.py
"""Idea-related endpoints for the Idea Board API."""

from fastapi import APIRouter, Query, status

from idea_board.api.v1.dependencies import (
    CommentServiceDep,
    CurrentUserDep,
    IdeaServiceDep,
    OptionalUserDep,
)
from idea_board.models import Comment, Idea
from idea_board.schemas.comment import CommentCreate, CommentOut, ReactionSummary
from idea_board.schemas.idea import (
    DeleteResponse,
    IdeaCounts,
    IdeaCreate,
    IdeaDetailOut,
    IdeaDetailResponse,
    IdeaListResponse,
    IdeaOut,
    IdeaSummaryOut,
    IdeaUpdate,
    VoteToggleResponse,
)
from idea_board.services.comment_service import summarize_reactions

router = APIRouter(prefix="/ideas", tags=["ideas"])


def comment_out(comment: Comment, viewer_id: str | None = None) -> CommentOut:
    """Render a comment with its reactions grouped by emoji."""
    rendered = CommentOut.model_validate(comment)
    rendered.reaction_summary = [
        ReactionSummary.model_validate(group)
        for group in summarize_reactions(comment.reactions, viewer_id)
    ]
    return rendered


@router.get("", response_model=IdeaListResponse)
async def list_ideas(
    service: IdeaServiceDep,
    viewer: OptionalUserDep,
    idea_type: str | None = Query(None, alias="type", description="FEATURE, PRODUCT or all"),
    idea_status: str | None = Query(None, alias="status", description="Status name or all"),
    sort: str = Query("votes", description="votes or recent"),
    search: str | None = Query(None, description="Substring of title or description"),
    author_id: str | None = Query(None, alias="authorId", description="Only this author's ideas"),
) -> IdeaListResponse:
    """List ideas with filters; drafts are hidden unless explicitly requested.

    Returns:
        Matching ideas and, for a signed-in caller, the ids they voted on
    """
    listing = service.list_ideas(
        idea_type=idea_type,
        status=idea_status,
        search=search,
        author_id=author_id,
        sort=sort,
        viewer=viewer,
    )
    ideas = [
        IdeaSummaryOut.model_validate(idea).model_copy(
            update={"comment_count": listing.comment_counts.get(idea.id, 0)}
        )
        for idea in listing.ideas
    ]
    return IdeaListResponse(ideas=ideas, user_votes=listing.user_votes)


@router.get("/{idea_id}", response_model=IdeaDetailResponse)
async def get_idea(
    idea_id: str,
    service: IdeaServiceDep,
    viewer: OptionalUserDep,
) -> IdeaDetailResponse:
    """Get a single idea with its discussion.

    Raises:
        NotFoundError: If the idea does not exist
    """
    detail = service.get_idea(idea_id, viewer)
    viewer_id = viewer.id if viewer is not None else None
    base = IdeaOut.model_validate(detail.idea).model_dump()
    idea = IdeaDetailOut(
        **base,
        comments=[comment_out(comment, viewer_id) for comment in detail.comments],
        counts=IdeaCounts(votes=detail.vote_total, comments=detail.comment_total),
    )
    return IdeaDetailResponse(idea=idea, has_voted=detail.has_voted)


@router.post("", response_model=IdeaOut, status_code=status.HTTP_201_CREATED)
async def create_idea(
    payload: IdeaCreate,
    current_user: CurrentUserDep,
    service: IdeaServiceDep,
) -> Idea:
    """Submit a new idea, or save it as a draft with ``status=DRAFT``."""
    return service.create_idea(payload.model_dump(), current_user)


@router.patch("/{idea_id}", response_model=IdeaOut)
async def update_idea(
    idea_id: str,
    payload: IdeaUpdate,
    current_user: CurrentUserDep,
    service: IdeaServiceDep,
) -> Idea:
    """Update title, description, product, status or AI summary of an owned idea.

    Raises:
        NotFoundError: If the idea does not exist
        ForbiddenError: If the caller is not the author
    """
    return service.update_idea(idea_id, payload.model_dump(exclude_unset=True), current_user)


@router.delete("/{idea_id}", response_model=DeleteResponse)
async def delete_idea(
    idea_id: str,
    current_user: CurrentUserDep,
    service: IdeaServiceDep,
) -> DeleteResponse:
    """Delete an owned idea along with its votes and comments."""
    service.delete_idea(idea_id, current_user)
    return DeleteResponse(success=True)


@router.post("/{idea_id}/vote", response_model=VoteToggleResponse)
async def toggle_vote(
    idea_id: str,
    current_user: CurrentUserDep,
    service: IdeaServiceDep,
) -> VoteToggleResponse:
    """Add the caller's vote, or remove it if already present."""
    voted = service.toggle_vote(idea_id, current_user)
    return VoteToggleResponse(voted=voted, message="Vote added" if voted else "Vote removed")


@router.post(
    "/{idea_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    idea_id: str,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    service: CommentServiceDep,
) -> CommentOut:
    """Comment on an idea."""
    comment = service.add_comment(idea_id, payload.content, current_user)
    return comment_out(comment, current_user.id)
