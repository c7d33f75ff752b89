"""SQLAlchemy model for signed-in employees."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from idea_board.db.session import Base
from idea_board.models._ids import new_id


class User(Base):
    """Identity mirrored from the external sign-in provider."""

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), unique=True, nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
