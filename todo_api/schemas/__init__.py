"""Pydantic schemas for API validation."""

from .todo import (
    TodoCreate,
    TodoResponse,
    TodoUpdate,
)

__all__ = [
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
]
