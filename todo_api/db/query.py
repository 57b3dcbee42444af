"""SQL fragment builders for parameterized queries."""

from typing import Any


def build_update_clause(
    data: dict[str, Any],
    exclude: set[str] | None = None
) -> tuple[str, list[Any]]:
    """Build the SET part of an UPDATE statement.

    Args:
        data: Column names mapped to new values. None is written as NULL.
        exclude: Column names that must never be updated

    Returns:
        Tuple of ("col1 = ?, col2 = ?", [value1, value2]).
        The clause is empty when there is nothing to update.
    """
    exclude = exclude or set()
    columns = [k for k in data if k not in exclude]

    clause = ", ".join(f"{column} = ?" for column in columns)
    params = [data[column] for column in columns]
    return clause, params
