# src/idea_board/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import ai_router, comments_router, ideas_router, users_router

__all__ = [
    "ai_router",
    "comments_router",
    "ideas_router",
    "users_router",
]
