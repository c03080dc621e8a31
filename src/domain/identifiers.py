"""Identifier generation and validation for domain entities."""

import uuid


def new_identifier() -> str:
    return str(uuid.uuid4())


def is_valid_identifier(value: object) -> bool:
    """
    Check that ``value`` is a canonical UUID string.

    Runs before any lookup so malformed ids never reach the store.
    """
    if not isinstance(value, str):
        return False
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return False
    return str(parsed) == value.lower()
