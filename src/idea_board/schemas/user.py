"""User-related Pydantic schemas."""

from pydantic import Field

from .common import CamelModel


class AuthorOut(CamelModel):
    """Display fields of the user who authored an idea or comment."""

    id: str
    name: str | None = None
    image: str | None = None


class ReactorOut(CamelModel):
    """Display fields of a user who reacted to a comment."""

    id: str
    name: str | None = None


class UserStats(CamelModel):
    """Activity totals shown on the caller's profile."""

    total_ideas: int = Field(..., description="Ideas authored by the caller")
    total_votes: int = Field(..., description="Votes received on the caller's ideas")
    total_comments: int = Field(..., description="Comments received on the caller's ideas")
