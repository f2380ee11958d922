"""Identifier parsing."""

from typing import Any
from uuid import UUID


def parse_id(value: Any) -> UUID | None:
    """Parse a path or payload identifier, returning None when malformed.

    Routes treat a malformed id exactly like an id that matches nothing.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None
