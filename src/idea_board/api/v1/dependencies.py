"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from idea_board.core.errors import UnauthorizedError
from idea_board.core.security import decode_access_token
from idea_board.db.session import get_db
from idea_board.models import User
from idea_board.services.ai_workshop import (
    AIWorkshopService,
    CompletionClient,
    get_completion_client,
)
from idea_board.services.comment_service import CommentService
from idea_board.services.idea_service import IdeaService

# Missing credentials are handled here so that they answer 401 like bad ones.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _resolve_user(credentials: HTTPAuthorizationCredentials | None, db: Session) -> User | None:
    if credentials is None:
        return None
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        return None
    return db.get(User, user_id)


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Return the user behind the session token.

    Raises:
        UnauthorizedError: If the token is missing, invalid, or names no user.
    """
    user = _resolve_user(credentials, db)
    if user is None:
        raise UnauthorizedError()
    return user


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Return the signed-in user, or None for anonymous or unverifiable callers."""
    return _resolve_user(credentials, db)


def get_idea_service(db: SessionDep) -> IdeaService:
    return IdeaService(db)


def get_comment_service(db: SessionDep) -> CommentService:
    return CommentService(db)


def get_completion_client_dep() -> CompletionClient:
    """Return the shared completion client."""
    return get_completion_client()


def get_ai_workshop_service(
    client: Annotated[CompletionClient, Depends(get_completion_client_dep)],
) -> AIWorkshopService:
    return AIWorkshopService(client)


CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
IdeaServiceDep = Annotated[IdeaService, Depends(get_idea_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
AIWorkshopServiceDep = Annotated[AIWorkshopService, Depends(get_ai_workshop_service)]
