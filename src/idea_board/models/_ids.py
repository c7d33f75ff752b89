"""Primary key generation shared by all models."""

import uuid


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex
