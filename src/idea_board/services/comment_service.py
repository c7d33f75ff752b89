"""Comments on ideas and emoji reactions on comments."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from idea_board.core.errors import InternalError, NotFoundError, ValidationError
from idea_board.models import Comment, Reaction, User
from idea_board.models.comment import MAX_EMOJI_LENGTH
from idea_board.repositories.idea_repo import IdeaRepository

logger = logging.getLogger(__name__)


@dataclass
class ReactionGroup:
    """Reactions sharing one emoji on one comment."""

    emoji: str
    count: int = 0
    users: list[str] = field(default_factory=list)
    reacted_by_me: bool = False


def summarize_reactions(
    reactions: Iterable[Reaction], viewer_id: str | None = None
) -> list[ReactionGroup]:
    """Group reaction rows by emoji, keeping the order emojis first appeared."""
    groups: dict[str, ReactionGroup] = {}
    for reaction in reactions:
        group = groups.setdefault(reaction.emoji, ReactionGroup(emoji=reaction.emoji))
        group.count += 1
        group.users.append(reaction.user.name or "Someone")
        if viewer_id is not None and reaction.user_id == viewer_id:
            group.reacted_by_me = True
    return list(groups.values())


class CommentService:
    """Add comments and toggle reactions."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = IdeaRepository(db)

    def add_comment(self, idea_id: str, content: str | None, user: User) -> Comment:
        """Attach a trimmed comment to an idea.

        Raises:
            ValidationError: If the content is empty after trimming.
            NotFoundError: If the idea does not exist.
        """
        text = (content or "").strip()
        if not text:
            raise ValidationError("Comment content is required")
        if self.repo.get_idea(idea_id) is None:
            raise NotFoundError("Idea not found")

        comment = Comment(content=text, user_id=user.id, idea_id=idea_id)
        try:
            self.repo.add_comment(comment)
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.exception("Failed to create comment on idea %s", idea_id)
            raise InternalError("Failed to create comment") from err

        self.db.refresh(comment)
        return comment

    def toggle_reaction(self, comment_id: str, emoji: str | None, user: User) -> bool:
        """Add or remove the caller's ``emoji`` on a comment.

        Returns True when the reaction is present afterwards. A duplicate
        insert from a concurrent request means the reaction is already
        there, which is the outcome the caller asked for.
        """
        emoji = (emoji or "").strip()
        if not emoji:
            raise ValidationError("Emoji is required")
        if len(emoji) > MAX_EMOJI_LENGTH:
            raise ValidationError("Emoji is too long")
        if self.repo.get_comment(comment_id) is None:
            raise NotFoundError("Comment not found")

        try:
            existing = self.repo.get_reaction(user.id, comment_id, emoji)
            if existing is not None:
                self.repo.delete_reaction(existing)
                added = False
            else:
                self.repo.insert_reaction(user.id, comment_id, emoji)
                added = True
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            if self.repo.get_comment(comment_id) is None:
                raise NotFoundError("Comment not found") from err
            if self.repo.get_reaction(user.id, comment_id, emoji) is None:
                logger.exception("Reaction insert on comment %s rejected", comment_id)
                raise InternalError("Failed to toggle reaction") from err
            logger.info(
                "Reaction %s by %s on comment %s already present", emoji, user.id, comment_id
            )
            return True
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.exception("Failed to toggle reaction on comment %s", comment_id)
            raise InternalError("Failed to toggle reaction") from err

        return added
