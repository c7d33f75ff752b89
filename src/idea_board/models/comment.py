"""Models for comments on ideas and emoji reactions on comments."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from idea_board.db.session import Base
from idea_board.db.session import utcnow
from idea_board.models._ids import new_id
from idea_board.models.user import User

if TYPE_CHECKING:
    from idea_board.models.idea import Idea

MAX_EMOJI_LENGTH = 32


class Comment(Base):
    """Discussion entry attached to an idea."""

    __tablename__ = "comment"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    idea_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("idea.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship("User")
    idea: Mapped[Idea] = relationship("Idea", back_populates="comments")
    reactions: Mapped[list[Reaction]] = relationship(
        "Reaction",
        back_populates="comment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Reaction.created_at",
    )


class Reaction(Base):
    """A user's emoji on a comment; one row per (user, comment, emoji)."""

    __tablename__ = "reaction"
    __table_args__ = (
        UniqueConstraint("user_id", "comment_id", "emoji", name="uq_reaction_user_comment_emoji"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    emoji: Mapped[str] = mapped_column(String(MAX_EMOJI_LENGTH), nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    comment_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship("User")
    comment: Mapped[Comment] = relationship("Comment", back_populates="reactions")
