"""Document identifier parsing."""

from uuid import UUID


def parse_id(raw: str | UUID) -> UUID | None:
    """Parse a path identifier, returning None when it is not a valid UUID."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(raw)
    except (TypeError, ValueError, AttributeError):
        return None
