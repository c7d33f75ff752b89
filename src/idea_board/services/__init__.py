"""Business logic services for the Idea Board application."""

from .ai_workshop import AIWorkshopService, AnthropicCompletionClient, CompletionClient
from .comment_service import CommentService
from .idea_service import IdeaService

__all__ = [
    "AIWorkshopService",
    "AnthropicCompletionClient",
    "CompletionClient",
    "CommentService",
    "IdeaService",
]
