"""Todo-specific operations.

IMPORT CONVENTION:
- Core accesses these through core.todo property

Every lookup accepts an optional creator. When given, the todo must belong
to that user; a todo owned by someone else is reported as not found.
"""

import sqlite3
from typing import Any

from . import query
from ..utils import isodatetime, uid
from ..exceptions import ResourceNotFound


class TodoOperations:
    """Todo CRUD operations."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize todo operations.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def get_by_id(self, todo_id: str, creator: str | None = None) -> sqlite3.Row:
        """Get todo by ID.

        Args:
            todo_id: The UUID of the todo
            creator: Optional owner ID to scope the lookup to

        Returns:
            sqlite3.Row with todo data

        Raises:
            ResourceNotFound: If todo_id is malformed or doesn't exist
        """
        if not uid.is_valid_uuid(todo_id):
            raise ResourceNotFound(
                f"Todo '{todo_id}' not found",
                {"todo_id": todo_id}
            )

        if creator is None:
            row = self._conn.execute(
                "SELECT * FROM todos WHERE id = ?",
                (todo_id,)
            ).fetchone()
        else:
            row = self._conn.execute(
                "SELECT * FROM todos WHERE id = ? AND creator = ?",
                (todo_id, creator)
            ).fetchone()

        if not row:
            raise ResourceNotFound(
                f"Todo '{todo_id}' not found",
                {"todo_id": todo_id}
            )

        return row

    def create(self, text: str, creator: str | None = None) -> str:
        """Create a todo with an auto-generated UUID.

        Args:
            text: Todo text, already trimmed and non-empty
            creator: Optional owning user ID

        Returns:
            The new todo ID
        """
        todo_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO todos (id, text, completed, completed_at, creator, created_at, updated_at)
               VALUES (?, ?, 0, NULL, ?, ?, ?)""",
            (todo_id, text, creator, now, now)
        )

        return todo_id

    def list(self, creator: str | None = None) -> list[sqlite3.Row]:
        """List todos in creation order, optionally only those of one creator."""
        if creator is None:
            return self._conn.execute(
                "SELECT * FROM todos ORDER BY created_at, rowid"
            ).fetchall()

        return self._conn.execute(
            "SELECT * FROM todos WHERE creator = ? ORDER BY created_at, rowid",
            (creator,)
        ).fetchall()

    def update(self, todo_id: str, patch: dict[str, Any], creator: str | None = None) -> None:
        """Apply a partial update to a todo.

        Args:
            todo_id: The UUID of the todo to update
            patch: Any of "text", "completed", "completed_at"
            creator: Optional owner ID to scope the update to

        Completion rules:
            - completed=True without completed_at stamps the current epoch millis
            - completed=True with completed_at keeps the supplied value
            - completed=False clears completed_at, whatever else was supplied
            - completed absent leaves completed and completed_at untouched

        Raises:
            ResourceNotFound: If todo_id is malformed or doesn't exist
        """
        self.get_by_id(todo_id, creator=creator)

        data: dict[str, Any] = {}
        if patch.get("text") is not None:
            data["text"] = patch["text"]

        completed = patch.get("completed")
        if completed is True:
            data["completed"] = 1
            completed_at = patch.get("completed_at")
            data["completed_at"] = completed_at if completed_at is not None else isodatetime.now_millis()
        elif completed is False:
            data["completed"] = 0
            data["completed_at"] = None

        update_clause, params = query.build_update_clause(data, exclude={"id", "creator"})
        if not update_clause:
            return

        params.extend([isodatetime.now(), todo_id])
        self._conn.execute(
            f"UPDATE todos SET {update_clause}, updated_at = ? WHERE id = ?",
            params
        )

    def delete(self, todo_id: str, creator: str | None = None) -> sqlite3.Row:
        """Delete a todo and return the removed row.

        Raises:
            ResourceNotFound: If todo_id is malformed or doesn't exist,
                including a todo deleted earlier
        """
        row = self.get_by_id(todo_id, creator=creator)
        self._conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))
        return row
