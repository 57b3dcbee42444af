"""UUID generation utilities.

This module centralizes all UUID generation and parsing. This is the ONLY
module that should import uuid. All other code should use uid.generate_uuid()
and uid.is_valid_uuid().
"""

from uuid import UUID, uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())


def is_valid_uuid(value: str) -> bool:
    """Check whether value is a canonical hyphenated UUID string."""
    try:
        return str(UUID(value)) == value.lower()
    except (ValueError, AttributeError, TypeError):
        return False
