from __future__ import annotations

from uuid import UUID, uuid4


class InvalidIdentifier(ValueError):
    pass


def new_id() -> str:
    """Generate a store identifier in canonical string form."""
    return str(uuid4())


def canonical_id(value: str) -> str:
    """Validate a store identifier and return its canonical string form.

    Identifiers are UUIDs. Hyphenless and upper-case spellings are accepted
    and normalized, so cache keys built from them stay stable.
    """
    if not value:
        raise InvalidIdentifier("empty value")
    try:
        return str(UUID(value))
    except ValueError as exc:
        raise InvalidIdentifier(f"invalid identifier: {value!r}") from exc
