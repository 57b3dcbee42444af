"""ISO 8601 datetime and epoch conversion utilities.

This module centralizes all transformations between Python datetime objects,
ISO 8601 strings and epoch numbers. All date/time operations should use these
functions to ensure consistency across the codebase.
"""

from datetime import datetime, UTC


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.isoformat().replace("+00:00", "Z")


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(datetime.now(UTC))


def now_unix() -> int:
    """Get current time as whole seconds since the epoch."""
    return int(datetime.now(UTC).timestamp())


def now_millis() -> int:
    """Get current time as milliseconds since the epoch."""
    return int(datetime.now(UTC).timestamp() * 1000)
