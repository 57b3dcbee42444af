"""Pydantic schemas for todo requests and responses."""

import sqlite3

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class TodoCreate(BaseModel):
    """POST /todos body. Unknown fields are ignored."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, description="Todo text, non-empty after trimming")


class TodoUpdate(BaseModel):
    """PATCH /todos/<id> body. All fields optional."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    text: str | None = Field(default=None, min_length=1)
    completed: StrictBool | None = None
    completed_at: int | None = Field(default=None, alias="completedAt")


class TodoResponse(BaseModel):
    """Todo as returned by the API."""

    id: str = Field(..., serialization_alias="_id")
    text: str
    completed: bool
    completed_at: int | None = Field(default=None, serialization_alias="completedAt")
    creator: str | None = Field(default=None, serialization_alias="_creator")

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "TodoResponse":
        """Build a response from a todos table row."""
        return cls(
            id=row["id"],
            text=row["text"],
            completed=bool(row["completed"]),
            completed_at=row["completed_at"],
            creator=row["creator"],
        )
