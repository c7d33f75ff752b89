"""Idea-related Pydantic schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from idea_board.models import IdeaStatus, IdeaType

from .comment import CommentOut
from .common import CamelModel
from .user import AuthorOut


class IdeaCreate(CamelModel):
    """Schema for submitting a new idea.

    Required fields are optional here so that the service can answer a
    missing field with its own validation error instead of a schema error.
    """

    title: str | None = Field(None, description="Short headline")
    description: str | None = Field(None, description="Full description of the idea")
    type: str | None = Field(None, description="FEATURE or PRODUCT, any case")
    product: str | None = Field(None, description="Optional product label")
    ai_development: str | None = Field(None, description="AI workshop summary text")
    status: str | None = Field(None, description="Defaults to SUBMITTED")


class IdeaUpdate(CamelModel):
    """Partial update of an idea; keys outside these fields are ignored."""

    title: str | None = None
    description: str | None = None
    product: str | None = None
    status: str | None = None
    ai_development: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class IdeaOut(CamelModel):
    """Schema for idea information returned by the API."""

    id: str
    title: str
    description: str
    type: IdeaType
    status: IdeaStatus
    product: str | None = None
    ai_development: str | None = None
    vote_count: int
    author_id: str
    created_at: datetime
    updated_at: datetime
    author: AuthorOut


class IdeaSummaryOut(IdeaOut):
    """Idea as shown in listings."""

    comment_count: int = 0


class IdeaCounts(CamelModel):
    """Aggregates computed from rows at read time."""

    votes: int
    comments: int


class IdeaDetailOut(IdeaOut):
    """Idea with its full discussion."""

    comments: list[CommentOut] = Field(default_factory=list)
    counts: IdeaCounts


class IdeaListResponse(CamelModel):
    """Listing payload with the caller's voted idea ids."""

    ideas: list[IdeaSummaryOut]
    user_votes: list[str] = Field(default_factory=list)


class IdeaDetailResponse(CamelModel):
    """Single idea payload with the caller's vote state."""

    idea: IdeaDetailOut
    has_voted: bool = False


class VoteToggleResponse(CamelModel):
    """Result of toggling the caller's vote."""

    voted: bool
    message: str


class DeleteResponse(CamelModel):
    """Acknowledgement of a deletion."""

    success: bool = True
