"""Models capturing up-votes on ideas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from idea_board.db.session import Base
from idea_board.db.session import utcnow
from idea_board.models._ids import new_id

if TYPE_CHECKING:
    from idea_board.models.idea import Idea


class Vote(Base):
    """A single user's up-vote on an idea."""

    __tablename__ = "vote"
    # One vote per user per idea; a racing duplicate insert fails here.
    __table_args__ = (UniqueConstraint("user_id", "idea_id", name="uq_vote_user_idea"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
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

    idea: Mapped[Idea] = relationship("Idea", back_populates="votes")
