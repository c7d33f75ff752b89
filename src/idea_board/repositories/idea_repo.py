"""Data access helpers for ideas, votes, comments and reactions."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import Session, joinedload, selectinload

from idea_board.models import Comment, Idea, IdeaStatus, IdeaType, Reaction, Vote

__all__ = ["IdeaFilters", "IdeaRepository"]

SORT_VOTES = "votes"
SORT_RECENT = "recent"


@dataclass(frozen=True)
class IdeaFilters:
    """Normalized listing criteria."""

    type: IdeaType | None = None
    # None means "every status except DRAFT".
    status: IdeaStatus | None = None
    search: str | None = None
    author_id: str | None = None
    sort: str = SORT_VOTES


class IdeaRepository:
    """Thin wrapper around database access for idea-related entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    # Ideas

    def get_idea(self, idea_id: str) -> Idea | None:
        """Return an idea by identifier."""
        return self.session.get(Idea, idea_id)

    def get_idea_with_discussion(self, idea_id: str) -> Idea | None:
        """Return an idea with author, comments, reactions and reactors loaded."""
        stmt = (
            select(Idea)
            .where(Idea.id == idea_id)
            .options(
                joinedload(Idea.author),
                selectinload(Idea.comments).joinedload(Comment.user),
                selectinload(Idea.comments)
                .selectinload(Comment.reactions)
                .joinedload(Reaction.user),
            )
        )
        return self.session.execute(stmt).unique().scalars().first()

    def list_ideas(self, filters: IdeaFilters) -> list[Idea]:
        """Return ideas matching ``filters`` with their authors loaded."""
        stmt = select(Idea).options(joinedload(Idea.author))

        if filters.type is not None:
            stmt = stmt.where(Idea.type == filters.type)

        if filters.status is not None:
            stmt = stmt.where(Idea.status == filters.status)
        else:
            stmt = stmt.where(Idea.status != IdeaStatus.DRAFT)

        if filters.author_id:
            stmt = stmt.where(Idea.author_id == filters.author_id)

        if filters.search:
            needle = filters.search.lower()
            stmt = stmt.where(
                or_(
                    func.lower(Idea.title).contains(needle, autoescape=True),
                    func.lower(Idea.description).contains(needle, autoescape=True),
                )
            )

        if filters.sort == SORT_RECENT:
            stmt = stmt.order_by(Idea.created_at.desc())
        else:
            stmt = stmt.order_by(Idea.vote_count.desc(), Idea.created_at.desc())

        return list(self.session.execute(stmt).unique().scalars())

    def add_idea(self, idea: Idea) -> Idea:
        """Stage a new idea and flush so defaults are populated."""
        self.session.add(idea)
        self.session.flush()
        return idea

    def delete_idea(self, idea: Idea) -> None:
        """Delete an idea; votes, comments and reactions cascade."""
        self.session.delete(idea)
        self.session.flush()

    def count_ideas_by_author(self, author_id: str) -> int:
        """Return how many ideas ``author_id`` has created."""
        stmt = select(func.count()).select_from(Idea).where(Idea.author_id == author_id)
        return int(self.session.execute(stmt).scalar() or 0)

    # Votes

    def get_vote(self, user_id: str, idea_id: str) -> Vote | None:
        """Return the caller's vote on an idea, if any."""
        stmt = select(Vote).where(Vote.user_id == user_id, Vote.idea_id == idea_id)
        return self.session.execute(stmt).scalars().first()

    def voted_idea_ids(self, user_id: str, idea_ids: Sequence[str]) -> list[str]:
        """Return the subset of ``idea_ids`` the user has voted on, in one query."""
        if not idea_ids:
            return []
        stmt = select(Vote.idea_id).where(Vote.user_id == user_id, Vote.idea_id.in_(idea_ids))
        voted = set(self.session.execute(stmt).scalars())
        return [idea_id for idea_id in idea_ids if idea_id in voted]

    def insert_vote(self, user_id: str, idea_id: str) -> Vote:
        """Insert a vote row; raises IntegrityError if one already exists."""
        vote = Vote(user_id=user_id, idea_id=idea_id)
        self.session.add(vote)
        self.session.flush()
        return vote

    def delete_vote(self, user_id: str, idea_id: str) -> int:
        """Delete the caller's vote row and return how many rows went away."""
        result = self.session.execute(
            delete(Vote).where(Vote.user_id == user_id, Vote.idea_id == idea_id)
        )
        return result.rowcount

    def adjust_vote_count(self, idea_id: str, delta: int) -> None:
        """Apply ``delta`` to the cached counter in SQL, not in Python."""
        self.session.execute(
            update(Idea)
            .where(Idea.id == idea_id)
            .values(vote_count=Idea.vote_count + delta)
        )

    def count_votes(self, idea_id: str) -> int:
        """Return the authoritative number of vote rows for an idea."""
        stmt = select(func.count()).select_from(Vote).where(Vote.idea_id == idea_id)
        return int(self.session.execute(stmt).scalar() or 0)

    def count_votes_received(self, author_id: str) -> int:
        """Return votes cast on any idea authored by ``author_id``."""
        stmt = (
            select(func.count())
            .select_from(Vote)
            .join(Idea, Vote.idea_id == Idea.id)
            .where(Idea.author_id == author_id)
        )
        return int(self.session.execute(stmt).scalar() or 0)

    # Comments

    def get_comment(self, comment_id: str) -> Comment | None:
        """Return a comment by identifier."""
        return self.session.get(Comment, comment_id)

    def add_comment(self, comment: Comment) -> Comment:
        """Stage a new comment and flush so defaults are populated."""
        self.session.add(comment)
        self.session.flush()
        return comment

    def comment_counts(self, idea_ids: Sequence[str]) -> dict[str, int]:
        """Return comment counts keyed by idea id, in one grouped query."""
        if not idea_ids:
            return {}
        stmt = (
            select(Comment.idea_id, func.count(Comment.id))
            .where(Comment.idea_id.in_(idea_ids))
            .group_by(Comment.idea_id)
        )
        return {idea_id: int(total) for idea_id, total in self.session.execute(stmt)}

    def count_comments_received(self, author_id: str) -> int:
        """Return comments posted on any idea authored by ``author_id``."""
        stmt = (
            select(func.count())
            .select_from(Comment)
            .join(Idea, Comment.idea_id == Idea.id)
            .where(Idea.author_id == author_id)
        )
        return int(self.session.execute(stmt).scalar() or 0)

    # Reactions

    def get_reaction(self, user_id: str, comment_id: str, emoji: str) -> Reaction | None:
        """Return the reaction identified by the (user, comment, emoji) triple."""
        stmt = select(Reaction).where(
            Reaction.user_id == user_id,
            Reaction.comment_id == comment_id,
            Reaction.emoji == emoji,
        )
        return self.session.execute(stmt).scalars().first()

    def insert_reaction(self, user_id: str, comment_id: str, emoji: str) -> Reaction:
        """Insert a reaction row; raises IntegrityError on a duplicate triple."""
        reaction = Reaction(user_id=user_id, comment_id=comment_id, emoji=emoji)
        self.session.add(reaction)
        self.session.flush()
        return reaction

    def delete_reaction(self, reaction: Reaction) -> None:
        """Delete a reaction row."""
        self.session.delete(reaction)
        self.session.flush()
