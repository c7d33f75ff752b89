# tests/v1/test_comments.py
"""Tests for comments and emoji reactions."""

from fastapi import status
from sqlalchemy import delete, func, select

from idea_board.models import Comment, Reaction
from idea_board.repositories.idea_repo import IdeaRepository


def test_add_comment(client, db_session, test_idea, other_user, other_auth_token) -> None:
    response = client.post(
        f"/api/v1/ideas/{test_idea.id}/comments",
        json={"content": "  Great idea!  "},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["content"] == "Great idea!"
    assert data["ideaId"] == test_idea.id
    assert data["userId"] == other_user.id
    assert data["user"]["name"] == "Bob"
    assert data["reactions"] == []
    assert data["reactionSummary"] == []


def test_blank_comment_rejected(client, db_session, test_idea, auth_token) -> None:
    response = client.post(
        f"/api/v1/ideas/{test_idea.id}/comments", json={"content": "   "}, headers=auth_token
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Comment content is required"}
    assert db_session.scalar(select(func.count()).select_from(Comment)) == 0


def test_comment_on_missing_idea(client, auth_token) -> None:
    response = client.post(
        "/api/v1/ideas/missing/comments", json={"content": "Hello"}, headers=auth_token
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Idea not found"}


def test_comment_requires_auth(client, test_idea) -> None:
    response = client.post(f"/api/v1/ideas/{test_idea.id}/comments", json={"content": "Hi"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_toggle_reaction(client, db_session, test_comment, other_auth_token) -> None:
    url = f"/api/v1/comments/{test_comment.id}/reactions"

    response = client.post(url, json={"emoji": "👍"}, headers=other_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"added": True, "emoji": "👍"}
    assert db_session.scalar(select(func.count()).select_from(Reaction)) == 1

    response = client.post(url, json={"emoji": "👍"}, headers=other_auth_token)
    assert response.json() == {"added": False, "emoji": "👍"}
    assert db_session.scalar(select(func.count()).select_from(Reaction)) == 0


def test_emojis_toggle_independently(
    client, db_session, headers_for, test_idea, test_comment, test_user, other_user
) -> None:
    url = f"/api/v1/comments/{test_comment.id}/reactions"
    client.post(url, json={"emoji": "👍"}, headers=headers_for(other_user))
    client.post(url, json={"emoji": "🚀"}, headers=headers_for(other_user))
    client.post(url, json={"emoji": "👍"}, headers=headers_for(test_user))

    detail = client.get(f"/api/v1/ideas/{test_idea.id}", headers=headers_for(test_user)).json()
    comment = detail["idea"]["comments"][0]
    assert len(comment["reactions"]) == 3
    summary = {group["emoji"]: group for group in comment["reactionSummary"]}
    assert summary["👍"]["count"] == 2
    assert sorted(summary["👍"]["users"]) == ["Alice", "Bob"]
    assert summary["👍"]["reactedByMe"] is True
    assert summary["🚀"] == {"emoji": "🚀", "count": 1, "users": ["Bob"], "reactedByMe": False}


def test_reaction_validation(client, db_session, test_comment, auth_token) -> None:
    url = f"/api/v1/comments/{test_comment.id}/reactions"

    response = client.post(url, json={}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Emoji is required"}

    response = client.post(url, json={"emoji": "x" * 33}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Emoji is too long"}

    assert db_session.scalar(select(func.count()).select_from(Reaction)) == 0


def test_reaction_on_missing_comment(client, auth_token) -> None:
    response = client.post(
        "/api/v1/comments/missing/reactions", json={"emoji": "👍"}, headers=auth_token
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Comment not found"}


def test_reaction_requires_auth(client, test_comment) -> None:
    response = client.post(
        f"/api/v1/comments/{test_comment.id}/reactions", json={"emoji": "👍"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_racing_duplicate_reaction_reports_added(
    client, db_session, monkeypatch, test_comment, other_auth_token
) -> None:
    url = f"/api/v1/comments/{test_comment.id}/reactions"
    client.post(url, json={"emoji": "🎉"}, headers=other_auth_token)

    read_reaction = IdeaRepository.get_reaction
    reads = []

    def stale_first_read(self, user_id, comment_id, emoji):
        reads.append(emoji)
        if len(reads) == 1:
            return None
        return read_reaction(self, user_id, comment_id, emoji)

    monkeypatch.setattr(IdeaRepository, "get_reaction", stale_first_read)
    response = client.post(url, json={"emoji": "🎉"}, headers=other_auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"added": True, "emoji": "🎉"}
    assert db_session.scalar(select(func.count()).select_from(Reaction)) == 1


def test_deleting_comment_idea_removes_reactions(
    client, db_session, test_idea, test_comment, auth_token
) -> None:
    client.post(
        f"/api/v1/comments/{test_comment.id}/reactions", json={"emoji": "👀"}, headers=auth_token
    )
    response = client.delete(f"/api/v1/ideas/{test_idea.id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK

    db_session.expire_all()
    assert db_session.scalar(select(func.count()).select_from(Comment)) == 0
    assert db_session.scalar(select(func.count()).select_from(Reaction)) == 0


def test_reaction_on_comment_deleted_mid_toggle(
    client, db_session, monkeypatch, test_comment, other_auth_token
) -> None:
    comment_id = test_comment.id

    def comment_vanishes(self, user_id, comment_id, emoji):
        self.session.execute(delete(Comment).where(Comment.id == comment_id))
        self.session.commit()
        return None

    monkeypatch.setattr(IdeaRepository, "get_reaction", comment_vanishes)
    response = client.post(
        f"/api/v1/comments/{comment_id}/reactions", json={"emoji": "👍"}, headers=other_auth_token
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Comment not found"}
    assert db_session.scalar(select(func.count()).select_from(Reaction)) == 0
