"""Session token helpers.

Sign-in itself happens in an external identity provider; this service only
mints tokens for local tooling and verifies the ones presented on requests.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from idea_board.core.settings import settings


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Return a signed session token whose subject is ``user_id``."""
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims: dict[str, Any] = {"sub": user_id, "exp": expire}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the subject of a valid token, or None if it cannot be trusted."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return subject
