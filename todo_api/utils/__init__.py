"""Utility functions for the todo API.

This package provides centralized utilities for common operations.
Import convention: use module-level imports for clarity.

    from utils import isodatetime, uid
    timestamp = isodatetime.now()
    millis = isodatetime.now_millis()
    todo_id = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
