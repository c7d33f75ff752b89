# src/idea_board/scripts/issue_token.py
"""
Mint a session token for local development.

Production tokens come from the external sign-in provider. This script stands
in for it: it creates (or refreshes) the local user record for an email
address and prints a bearer token for that user.

Usage:
    python -m idea_board.scripts.issue_token alice@example.com --name "Alice"
"""

from __future__ import annotations

import argparse
from datetime import timedelta

from idea_board.core.security import create_access_token
from idea_board.db.session import SessionLocal
from idea_board.services.user_service import upsert_user


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Issue a development session token")
    parser.add_argument("email", help="Email address identifying the user")
    parser.add_argument("--name", default=None, help="Display name to store")
    parser.add_argument("--image", default=None, help="Avatar URL to store")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    db = SessionLocal()
    try:
        user = upsert_user(db, email=args.email, name=args.name, image=args.image)
        expires = timedelta(minutes=args.minutes) if args.minutes else None
        print(create_access_token(user.id, expires))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
