"""Client-style opaque id generation."""

import uuid


def generate_id(prefix: str | None = None) -> str:
    """Generate an opaque unique id, optionally prefixed (e.g. "break-...")."""
    token = uuid.uuid4().hex[:16]
    if prefix:
        return f"{prefix}-{token}"
    return token
