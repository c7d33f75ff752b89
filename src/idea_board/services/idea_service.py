"""Idea lifecycle and voting."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from idea_board.core.errors import (
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from idea_board.models import Comment, Idea, IdeaStatus, IdeaType, User
from idea_board.repositories.idea_repo import SORT_RECENT, SORT_VOTES, IdeaFilters, IdeaRepository

logger = logging.getLogger(__name__)

ALL = "all"
MAX_TITLE_LENGTH = 255

# Fields a PATCH may touch; everything else in the payload is dropped.
UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "product", "status", "ai_development"}
)
_NON_BLANK_FIELDS = ("title", "description")


@dataclass
class IdeaListing:
    """Ideas matching a listing request plus per-caller extras."""

    ideas: list[Idea]
    comment_counts: dict[str, int]
    user_votes: list[str] = field(default_factory=list)


@dataclass
class IdeaDetail:
    """An idea with its discussion and read-time aggregates."""

    idea: Idea
    comments: list[Comment]
    vote_total: int
    comment_total: int
    has_voted: bool


def parse_idea_type(value: str | None, *, allow_all: bool = False) -> IdeaType | None:
    """Normalize a user-supplied idea type to its enum form.

    Returns None for an empty value, or for ``"all"`` when ``allow_all`` is set.
    """
    if value is None or not value.strip():
        return None
    normalized = value.strip().upper()
    if allow_all and normalized == ALL.upper():
        return None
    try:
        return IdeaType(normalized)
    except ValueError as err:
        raise ValidationError(f"Unknown idea type: {value}") from err


def parse_idea_status(value: str | None, *, allow_all: bool = False) -> IdeaStatus | None:
    """Normalize a user-supplied status to its enum form."""
    if value is None or not value.strip():
        return None
    normalized = value.strip().upper()
    if allow_all and normalized == ALL.upper():
        return None
    try:
        return IdeaStatus(normalized)
    except ValueError as err:
        raise ValidationError(f"Unknown idea status: {value}") from err


def _require_text(
    payload: Mapping[str, Any], name: str, message: str = "Missing required fields"
) -> str:
    value = payload.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


def _check_title(title: str) -> str:
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")
    return title


class IdeaService:
    """Create, read, update, delete and vote on ideas.

    Every mutating method commits on success and rolls back on failure, so a
    caller never observes a half-applied change.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = IdeaRepository(db)

    def list_ideas(
        self,
        *,
        idea_type: str | None = None,
        status: str | None = None,
        search: str | None = None,
        author_id: str | None = None,
        sort: str | None = None,
        viewer: User | None = None,
    ) -> IdeaListing:
        """Return ideas matching the filters, newest or most-voted first.

        Args:
            idea_type: FEATURE, PRODUCT, ``all`` or None.
            status: A status name, ``all`` or None; the last two hide drafts.
            search: Case-insensitive substring over title or description.
            author_id: Restrict to one author's ideas.
            sort: ``votes`` (default) or ``recent``.
            viewer: Authenticated caller, if any.

        Returns:
            The ideas, their comment counts and the ids the viewer voted on.
        """
        parsed_status = parse_idea_status(status, allow_all=True)
        if parsed_status is IdeaStatus.DRAFT:
            # Drafts are private to their author.
            if viewer is None or (author_id and author_id != viewer.id):
                return IdeaListing(ideas=[], comment_counts={})
            author_id = viewer.id

        filters = IdeaFilters(
            type=parse_idea_type(idea_type, allow_all=True),
            status=parsed_status,
            search=search.strip() if search and search.strip() else None,
            author_id=author_id or None,
            sort=SORT_RECENT if sort == SORT_RECENT else SORT_VOTES,
        )
        ideas = self.repo.list_ideas(filters)
        idea_ids = [idea.id for idea in ideas]
        listing = IdeaListing(ideas=ideas, comment_counts=self.repo.comment_counts(idea_ids))
        if viewer is not None:
            listing.user_votes = self.repo.voted_idea_ids(viewer.id, idea_ids)
        return listing

    def get_idea(self, idea_id: str, viewer: User | None = None) -> IdeaDetail:
        """Return an idea with comments newest-first and the viewer's vote state."""
        idea = self.repo.get_idea_with_discussion(idea_id)
        if idea is None:
            raise NotFoundError("Idea not found")

        comments = sorted(idea.comments, key=lambda comment: comment.created_at, reverse=True)
        has_voted = False
        if viewer is not None:
            has_voted = self.repo.get_vote(viewer.id, idea.id) is not None

        return IdeaDetail(
            idea=idea,
            comments=comments,
            vote_total=self.repo.count_votes(idea.id),
            comment_total=len(comments),
            has_voted=has_voted,
        )

    def create_idea(self, payload: Mapping[str, Any], author: User) -> Idea:
        """Persist a new idea authored by ``author``.

        Raises:
            ValidationError: If title, description or type is missing or invalid.
        """
        title = _check_title(_require_text(payload, "title"))
        description = _require_text(payload, "description")
        idea_type = parse_idea_type(_require_text(payload, "type"))
        status = parse_idea_status(payload.get("status")) or IdeaStatus.SUBMITTED

        idea = Idea(
            title=title,
            description=description,
            type=idea_type,
            status=status,
            product=payload.get("product"),
            ai_development=payload.get("ai_development"),
            vote_count=0,
            author_id=author.id,
        )
        try:
            self.repo.add_idea(idea)
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.exception("Failed to create idea for user %s", author.id)
            raise InternalError("Failed to create idea") from err

        self.db.refresh(idea)
        logger.info("Idea %s created by %s", idea.id, author.id)
        return idea

    def _get_owned_idea(self, idea_id: str, user: User) -> Idea:
        idea = self.repo.get_idea(idea_id)
        if idea is None:
            raise NotFoundError("Idea not found")
        if idea.author_id != user.id:
            raise ForbiddenError("Forbidden")
        return idea

    def update_idea(self, idea_id: str, patch: Mapping[str, Any], user: User) -> Idea:
        """Apply a whitelisted partial update to an idea the caller owns.

        Keys outside ``UPDATABLE_FIELDS`` are ignored.

        Raises:
            NotFoundError: If the idea does not exist.
            ForbiddenError: If the caller is not the author.
            ValidationError: If a field would become blank or a status is unknown.
        """
        idea = self._get_owned_idea(idea_id, user)

        changes: dict[str, Any] = {}
        for key, value in patch.items():
            if key not in UPDATABLE_FIELDS:
                logger.debug("Ignoring non-updatable field %r on idea %s", key, idea_id)
                continue
            if key in _NON_BLANK_FIELDS:
                value = _require_text(patch, key, f"{key.capitalize()} must not be empty")
            if key == "title":
                value = _check_title(value)
            if key == "status":
                value = parse_idea_status(value)
                if value is None:
                    raise ValidationError("Status must not be empty")
            changes[key] = value

        for key, value in changes.items():
            setattr(idea, key, value)

        try:
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.exception("Failed to update idea %s", idea_id)
            raise InternalError("Failed to update idea") from err

        self.db.refresh(idea)
        return idea

    def delete_idea(self, idea_id: str, user: User) -> None:
        """Delete an idea the caller owns together with its votes and comments."""
        idea = self._get_owned_idea(idea_id, user)
        try:
            self.repo.delete_idea(idea)
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.exception("Failed to delete idea %s", idea_id)
            raise InternalError("Failed to delete idea") from err
        logger.info("Idea %s deleted by %s", idea_id, user.id)

    def toggle_vote(self, idea_id: str, user: User) -> bool:
        """Flip the caller's vote on an idea and return the new voted state.

        The vote row and the cached ``vote_count`` change in one transaction.
        The counter only moves when the row insert or delete actually took
        effect, so a toggle that loses a race to a concurrent one changes
        nothing.

        Raises:
            NotFoundError: If the idea does not exist, or vanished mid-toggle.
            ConflictError: If a concurrent toggle already applied the change.
        """
        if self.repo.get_idea(idea_id) is None:
            raise NotFoundError("Idea not found")

        try:
            existing = self.repo.get_vote(user.id, idea_id)
            if existing is not None:
                if self.repo.delete_vote(user.id, idea_id) != 1:
                    self.db.rollback()
                    logger.warning("Concurrent unvote by %s on idea %s", user.id, idea_id)
                    raise ConflictError("Vote was already removed")
                self.repo.adjust_vote_count(idea_id, -1)
                voted = False
            else:
                self.repo.insert_vote(user.id, idea_id)
                self.repo.adjust_vote_count(idea_id, 1)
                voted = True
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            if self.repo.get_idea(idea_id) is None:
                raise NotFoundError("Idea not found") from err
            logger.warning("Concurrent vote by %s on idea %s rejected", user.id, idea_id)
            raise ConflictError("Vote was already recorded") from err
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.exception("Failed to toggle vote on idea %s", idea_id)
            raise InternalError("Failed to toggle vote") from err

        logger.debug("User %s %s idea %s", user.id, "voted on" if voted else "unvoted", idea_id)
        return voted
