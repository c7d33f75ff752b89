"""SQLAlchemy models for the Idea Board application."""

from .comment import Comment, Reaction
from .idea import Idea, IdeaStatus, IdeaType
from .user import User
from .vote import Vote

__all__ = [
    "Comment", "Reaction",
    "Idea", "IdeaStatus", "IdeaType",
    "User",
    "Vote",
]
