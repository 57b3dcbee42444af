"""Database module for the todo API.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to entity operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or on garbage collection (atomic=False)
- Each entity type gets an encapsulated class with related operations

    # Read (autocommit Core):
    core = get_core()
    row = core.todo.get_by_id(todo_id)

    # Write (atomic Core, commits on exit):
    with get_core(atomic=True) as core:
        todo_id = core.todo.create("Walk the dog")

ID GENERATION POLICY:
All entity IDs are auto-generated UUIDs inside the operations classes.
Callers never pass IDs to create().
"""

from pathlib import Path
from typing import TYPE_CHECKING
import sqlite3
from ..config import settings
from ..exceptions import DatabaseError

if TYPE_CHECKING:
    from .todo import TodoOperations
    from .user import UserOperations


class Core:
    """
    Database Core with entity operations.

    Maintains its own connection and transaction state.
    Provides access to entity operations through properties.

    Connection Lifecycle:
    - atomic=True: Connection closes on __exit__ from context manager
    - atomic=False: Connection closes when the Core is garbage collected
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
                    If False, Core has autocommit semantics.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._todo_ops = None

    @property
    def user(self) -> "UserOperations":
        """User and session token operations.

        Lazy-loaded to avoid circular import issues.
        """
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def todo(self) -> "TodoOperations":
        """Todo operations.

        Lazy-loaded to avoid circular import issues.
        """
        if self._todo_ops is None:
            from .todo import TodoOperations
            self._todo_ops = TodoOperations(self._conn)
        return self._todo_ops

    @property
    def connection(self) -> sqlite3.Connection:
        """Underlying SQLite connection, for service-level functions."""
        return self._conn

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction.

        Store failures inside the block or during commit are re-raised as
        DatabaseError after the connection is closed.
        """
        try:
            try:
                if exc_type is None:
                    self._conn.commit()
                else:
                    self._conn.rollback()
            finally:
                # Always close the connection
                self._conn.close()
        except sqlite3.Error as e:
            raise DatabaseError("Database transaction failed") from e

        if isinstance(exc_val, sqlite3.Error):
            raise DatabaseError("Database operation failed") from exc_val

    def __del__(self):
        """Close the connection if it is still open.

        Errors are ignored since the connection may already be closed.
        """
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                pass


def _create_connection() -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(str(db_path))
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as e:
        raise DatabaseError("Could not open database") from e
    conn.row_factory = sqlite3.Row
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                All writes inside the block commit together on exit.
                If False (default), returns a Core for reads or for callers
                that commit explicitly.

    Returns:
        Core instance with user/todo operations

    Examples:
        >>> core = get_core()
        >>> rows = core.todo.list()

        >>> with get_core(atomic=True) as core:
        ...     user = service.create_user(core.connection, data)
        ...     token.issue_auth_token(core.connection, user)
    """
    conn = _create_connection()
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with sqlite3.connect(str(db_path)) as db:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        db.executescript(SCHEMA_PATH.read_text())
        db.commit()


def get_schema_version(conn: sqlite3.Connection) -> str:
    """Get current schema version from the _schema_metadata table."""
    row = conn.execute(
        "SELECT value FROM _schema_metadata WHERE key = 'version'"
    ).fetchone()
    return row[0] if row else "unknown"
