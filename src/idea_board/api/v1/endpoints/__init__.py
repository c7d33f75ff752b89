# src/idea_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .ai import router as ai_router
from .comments import router as comments_router
from .ideas import router as ideas_router
from .users import router as users_router

__all__ = [
    "ai_router",
    "comments_router",
    "ideas_router",
    "users_router",
]
