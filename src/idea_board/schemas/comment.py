"""Comment and reaction Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel
from .user import AuthorOut, ReactorOut


class CommentCreate(CamelModel):
    """Schema for posting a comment."""

    content: str | None = Field(None, description="Comment text; must not be blank")


class ReactionOut(CamelModel):
    """A single reaction row."""

    id: str
    emoji: str
    user_id: str
    user: ReactorOut


class ReactionSummary(CamelModel):
    """Reactions on a comment grouped by emoji."""

    emoji: str
    count: int
    users: list[str]
    reacted_by_me: bool = False


class CommentOut(CamelModel):
    """Schema for comment information returned by the API."""

    id: str
    content: str
    user_id: str
    idea_id: str
    created_at: datetime
    user: AuthorOut
    reactions: list[ReactionOut] = Field(default_factory=list)
    reaction_summary: list[ReactionSummary] = Field(default_factory=list)


class ReactionToggle(CamelModel):
    """Schema for toggling an emoji reaction."""

    emoji: str | None = Field(None, description="Emoji to add or remove")


class ReactionToggleResponse(CamelModel):
    """Result of toggling a reaction."""

    added: bool
    emoji: str
