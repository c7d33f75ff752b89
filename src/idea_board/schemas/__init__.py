"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .ai import ChatMessage, DevelopRequest, DevelopResponse, IdeaDraft, SummarizeRequest, SummarizeResponse
from .comment import (
    CommentCreate,
    CommentOut,
    ReactionOut,
    ReactionSummary,
    ReactionToggle,
    ReactionToggleResponse,
)
from .idea import (
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
from .user import AuthorOut, ReactorOut, UserStats

__all__ = [
    "ChatMessage", "DevelopRequest", "DevelopResponse", "IdeaDraft",
    "SummarizeRequest", "SummarizeResponse",
    "CommentCreate", "CommentOut", "ReactionOut", "ReactionSummary",
    "ReactionToggle", "ReactionToggleResponse",
    "DeleteResponse", "IdeaCounts", "IdeaCreate", "IdeaDetailOut", "IdeaDetailResponse",
    "IdeaListResponse", "IdeaOut", "IdeaSummaryOut", "IdeaUpdate", "VoteToggleResponse",
    "AuthorOut", "ReactorOut", "UserStats",
]
