"""initial schema

Revision ID: 5c1e2a9d7b40
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

IDEA_TYPES = ("FEATURE", "PRODUCT")
IDEA_STATUSES = ("DRAFT", "SUBMITTED", "UNDER_REVIEW", "APPROVED", "IMPLEMENTED", "REJECTED")


def upgrade() -> None:
    """Create users, ideas, votes, comments and reactions."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "idea",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(*IDEA_TYPES, name="idea_type", native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum(*IDEA_STATUSES, name="idea_status", native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column("product", sa.Text(), nullable=True),
        sa.Column("ai_development", sa.Text(), nullable=True),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("author_id", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_idea_author_id", "idea", ["author_id"])
    op.create_index("ix_idea_created_at", "idea", ["created_at"])
    op.create_index("ix_idea_status_vote_count", "idea", ["status", "vote_count"])

    op.create_table(
        "vote",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("idea_id", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["idea_id"], ["idea.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "idea_id", name="uq_vote_user_idea"),
    )
    op.create_index("ix_vote_idea_id", "vote", ["idea_id"])

    op.create_table(
        "comment",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("idea_id", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["idea_id"], ["idea.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comment_idea_id", "comment", ["idea_id"])

    op.create_table(
        "reaction",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("emoji", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("comment_id", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["comment_id"], ["comment.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "comment_id", "emoji", name="uq_reaction_user_comment_emoji"
        ),
    )
    op.create_index("ix_reaction_comment_id", "reaction", ["comment_id"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_reaction_comment_id", table_name="reaction")
    op.drop_table("reaction")
    op.drop_index("ix_comment_idea_id", table_name="comment")
    op.drop_table("comment")
    op.drop_index("ix_vote_idea_id", table_name="vote")
    op.drop_table("vote")
    op.drop_index("ix_idea_status_vote_count", table_name="idea")
    op.drop_index("ix_idea_created_at", table_name="idea")
    op.drop_index("ix_idea_author_id", table_name="idea")
    op.drop_table("idea")
    op.drop_table("app_user")
