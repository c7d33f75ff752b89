"""SQLAlchemy models for ideas and their lifecycle enums."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from idea_board.db.session import Base
from idea_board.db.session import utcnow
from idea_board.models._ids import new_id

if TYPE_CHECKING:
    from idea_board.models.comment import Comment
    from idea_board.models.user import User
    from idea_board.models.vote import Vote


class IdeaType(str, enum.Enum):
    """Kind of proposal an idea represents."""

    FEATURE = "FEATURE"
    PRODUCT = "PRODUCT"


class IdeaStatus(str, enum.Enum):
    """Review lifecycle of an idea."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    IMPLEMENTED = "IMPLEMENTED"
    REJECTED = "REJECTED"


class Idea(Base):
    """A feature or product proposal submitted by an employee.

    ``vote_count`` caches the number of rows in ``vote`` for this idea so that
    listings can sort by popularity without aggregating. It is only ever
    changed together with a vote row, inside the same transaction.
    """

    __tablename__ = "idea"
    __table_args__ = (
        Index("ix_idea_status_vote_count", "status", "vote_count"),
        Index("ix_idea_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[IdeaType] = mapped_column(
        Enum(IdeaType, name="idea_type", native_enum=False, length=16),
        nullable=False,
    )
    status: Mapped[IdeaStatus] = mapped_column(
        Enum(IdeaStatus, name="idea_status", native_enum=False, length=16),
        nullable=False,
        default=IdeaStatus.SUBMITTED,
    )
    # Free-form product label for FEATURE ideas.
    product: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Raw summary text produced by the AI workshop.
    ai_development: Mapped[str | None] = mapped_column(Text, nullable=True)
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User")
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        back_populates="idea",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="idea",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
