"""Per-user activity figures."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from idea_board.models import User
from idea_board.repositories.idea_repo import IdeaRepository

__all__ = ["ActivityTotals", "get_user_stats", "upsert_user"]


@dataclass(frozen=True)
class ActivityTotals:
    """Totals shown on a profile page."""

    total_ideas: int
    total_votes: int
    total_comments: int


def get_user_stats(db: Session, user: User) -> ActivityTotals:
    """Return ideas authored and votes/comments received by ``user``."""
    repo = IdeaRepository(db)
    return ActivityTotals(
        total_ideas=repo.count_ideas_by_author(user.id),
        total_votes=repo.count_votes_received(user.id),
        total_comments=repo.count_comments_received(user.id),
    )


def upsert_user(
    db: Session, *, email: str, name: str | None = None, image: str | None = None
) -> User:
    """Create or refresh the local mirror of a signed-in user."""
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(email=email)
        db.add(user)
    if name is not None:
        user.name = name
    if image is not None:
        user.image = image
    db.commit()
    db.refresh(user)
    return user
