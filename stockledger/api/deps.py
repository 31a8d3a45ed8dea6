from fastapi import Header


def get_actor(x_actor: str | None = Header(None)) -> str | None:
    """Acting user for audit attribution, taken from the X-Actor header."""
    return (x_actor or "").strip() or None
