"""User and session token operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- auth.service and auth.token build on these operations; routes should go
  through those modules rather than calling UserOperations directly

A user's token list lives in the user_tokens table, one row per issued
token. Rows are ordered by their autoincrement id, which preserves issue order.
"""

import sqlite3

from ..utils import isodatetime, uid


class UserOperations:
    """User row and token list operations."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def create(self, email: str, password_hash: str) -> str:
        """Insert a user with an auto-generated UUID.

        Args:
            email: Already validated and trimmed email
            password_hash: bcrypt hash of the password

        Returns:
            The new user ID

        Raises:
            sqlite3.IntegrityError: If the email is already taken
        """
        user_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO users (id, email, password_hash, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (user_id, email, password_hash, now, now)
        )
        return user_id

    def get_by_id(self, user_id: str) -> sqlite3.Row | None:
        """Get a user row by ID, or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        """Get a user row by exact email, or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE email = ?",
            (email,)
        ).fetchone()

    def set_password_hash(self, user_id: str, password_hash: str) -> bool:
        """Replace the stored password hash.

        Returns:
            True if a user row was updated
        """
        cursor = self._conn.execute(
            "UPDATE users SET password_hash = ?, updated_at = ? WHERE id = ?",
            (password_hash, isodatetime.now(), user_id)
        )
        return cursor.rowcount > 0

    def push_token(self, user_id: str, access: str, token: str) -> None:
        """Append an {access, token} entry to the user's token list."""
        now = isodatetime.now()
        self._conn.execute(
            """INSERT INTO user_tokens (user_id, access, token, created_at)
               VALUES (?, ?, ?, ?)""",
            (user_id, access, token, now)
        )
        self._conn.execute(
            "UPDATE users SET updated_at = ? WHERE id = ?",
            (now, user_id)
        )

    def list_tokens(self, user_id: str) -> list[dict]:
        """Get the user's token list in issue order."""
        rows = self._conn.execute(
            "SELECT access, token FROM user_tokens WHERE user_id = ? ORDER BY id",
            (user_id,)
        ).fetchall()
        return [{"access": row["access"], "token": row["token"]} for row in rows]

    def find_by_token(self, user_id: str, access: str, token: str) -> sqlite3.Row | None:
        """Get the user only if its token list holds this exact entry."""
        return self._conn.execute(
            """SELECT u.* FROM users u
               JOIN user_tokens t ON t.user_id = u.id
               WHERE u.id = ? AND t.access = ? AND t.token = ?
               LIMIT 1""",
            (user_id, access, token)
        ).fetchone()

    def pull_token(self, user_id: str, token: str) -> bool:
        """Remove every entry matching token from the user's token list.

        Returns:
            True if at least one entry was removed
        """
        cursor = self._conn.execute(
            "DELETE FROM user_tokens WHERE user_id = ? AND token = ?",
            (user_id, token)
        )
        return cursor.rowcount > 0
