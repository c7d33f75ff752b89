# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator, Sequence
from datetime import datetime, timedelta
from functools import partial
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")

from idea_board.api.v1.dependencies import get_completion_client_dep  # noqa: E402
from idea_board.core.security import create_access_token  # noqa: E402
from idea_board.db.session import Base, enable_sqlite_foreign_keys  # noqa: E402
from idea_board.db.session import get_db as app_get_session  # noqa: E402
from idea_board.main import app as fastapi_app  # noqa: E402
from idea_board.models import Comment, Idea, IdeaStatus, IdeaType, User  # noqa: E402
from idea_board.services.ai_workshop import ChatTurn  # noqa: E402

TEST_DB_URL = "sqlite://"
BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


class FakeCompletionClient:
    """Records every call and answers with a canned reply."""

    def __init__(self, reply: str = "Who else has this problem?") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[dict[str, Any]] = []

    async def complete(
        self, system_prompt: str, turns: Sequence[ChatTurn], *, max_tokens: int
    ) -> str:
        self.calls.append(
            {"system_prompt": system_prompt, "turns": list(turns), "max_tokens": max_tokens}
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    completion_client: FakeCompletionClient,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_completion_client_dep] = lambda: completion_client
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_completion_client_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db_session: Session, name: str, email: str) -> User:
    user = User(name=name, email=email, image=f"https://avatars.test/{name.lower()}.png")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return the primary persisted user."""
    return _make_user(db_session, "Alice", "alice@example.com")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _make_user(db_session, "Bob", "bob@example.com")


@pytest.fixture()
def third_user(db_session: Session) -> User:
    """Create and return a third persisted user."""
    return _make_user(db_session, "Carol", "carol@example.com")


def _auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building authorization headers for any user."""
    return _auth_headers


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _auth_headers(other_user)


def _make_idea(
    db_session: Session,
    author: User,
    *,
    title: str = "Dark mode",
    description: str = "Add a dark theme",
    idea_type: IdeaType = IdeaType.FEATURE,
    status: IdeaStatus = IdeaStatus.SUBMITTED,
    vote_count: int = 0,
    minutes: int = 0,
) -> Idea:
    idea = Idea(
        title=title,
        description=description,
        type=idea_type,
        status=status,
        vote_count=vote_count,
        author_id=author.id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db_session.add(idea)
    db_session.commit()
    db_session.refresh(idea)
    return idea


def _make_comment(
    db_session: Session, idea: Idea, author: User, content: str, *, minutes: int = 0
) -> Comment:
    comment = Comment(
        content=content,
        idea_id=idea.id,
        user_id=author.id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)
    return comment


@pytest.fixture()
def make_idea(db_session: Session) -> Callable[..., Idea]:
    """Return a factory persisting ideas with a controllable ``created_at``."""
    return partial(_make_idea, db_session)


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    """Return a factory persisting comments with a controllable ``created_at``."""
    return partial(_make_comment, db_session)


@pytest.fixture()
def test_idea(db_session: Session, test_user: User) -> Idea:
    """Create a baseline idea authored by the primary user."""
    return _make_idea(db_session, test_user)


@pytest.fixture()
def test_comment(db_session: Session, test_idea: Idea, test_user: User) -> Comment:
    """Create a baseline comment on the baseline idea."""
    return _make_comment(db_session, test_idea, test_user, "Great idea!")
