"""Todo CRUD endpoints.

- POST   /todos       - Create todo
- GET    /todos       - List todos
- GET    /todos/{id}  - Get single todo
- PATCH  /todos/{id}  - Update text and/or completion
- DELETE /todos/{id}  - Delete todo

Malformed IDs are answered with 404, the same as unknown IDs.

With settings.todos_require_auth enabled, every route requires the x-auth
header and only sees todos created by the authenticated user. Otherwise the
routes are open, and POST still records the creator when a valid token is sent.
"""

import logging

from flask import Blueprint, g, jsonify

from ..auth.decorators import authenticate_if_present, authenticate_request
from ..config import settings
from ..db import get_core
from ..schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from .validation import validate_request

logger = logging.getLogger(__name__)


# Create Blueprint
todos_bp = Blueprint("todos", __name__, url_prefix="/todos")


@todos_bp.before_request
def authenticate():
    """Require x-auth on all todo routes when todos_require_auth is set."""
    if settings.todos_require_auth:
        authenticate_request()


def _owner_scope() -> str | None:
    """Creator ID to scope queries to, or None for unscoped access."""
    if settings.todos_require_auth:
        return g.user_id
    return None


def _serialize(row) -> dict:
    return TodoResponse.from_row(row).model_dump(by_alias=True)


@todos_bp.post("")
@validate_request
def create_todo(data: TodoCreate):
    """
    Create a new todo.

    Request Body (TodoCreate):
        - text: str (required, non-empty after trimming)

    A valid x-auth token records the caller as creator. An invalid token is
    logged and ignored, and the todo is created without a creator.

    Returns:
        200: Created todo
        400: Validation error
    """
    creator = _owner_scope() or authenticate_if_present()

    with get_core(atomic=True) as core:
        todo_id = core.todo.create(data.text, creator=creator)
        row = core.todo.get_by_id(todo_id)

    logger.info(f"Todo created: {todo_id}")
    return jsonify(_serialize(row)), 200


@todos_bp.get("")
def list_todos():
    """
    List todos.

    Returns:
        200: {"todos": [...]}
    """
    core = get_core()
    rows = core.todo.list(creator=_owner_scope())

    return jsonify({"todos": [_serialize(row) for row in rows]})


@todos_bp.get("/<todo_id>")
def get_todo(todo_id: str):
    """
    Get a single todo by ID.

    Returns:
        200: {"todo": {...}}
        404: Todo not found or ID malformed
    """
    core = get_core()
    row = core.todo.get_by_id(todo_id, creator=_owner_scope())

    return jsonify({"todo": _serialize(row)})


@todos_bp.patch("/<todo_id>")
@validate_request
def update_todo(todo_id: str, data: TodoUpdate):
    """
    Update a todo. Only text, completed and completedAt are accepted.

    completed=true stamps completedAt with the current time unless one is
    supplied; completed=false clears completedAt.

    Returns:
        200: {"todo": {...}}
        400: Validation error
        404: Todo not found or ID malformed
    """
    scope = _owner_scope()

    with get_core(atomic=True) as core:
        core.todo.update(todo_id, data.model_dump(exclude_unset=True), creator=scope)
        row = core.todo.get_by_id(todo_id, creator=scope)

    logger.info(f"Todo updated: {todo_id}")
    return jsonify({"todo": _serialize(row)})


@todos_bp.delete("/<todo_id>")
def delete_todo(todo_id: str):
    """
    Delete a todo and return it.

    Returns:
        200: {"todo": {...}}
        404: Todo not found, already deleted, or ID malformed
    """
    with get_core(atomic=True) as core:
        row = core.todo.delete(todo_id, creator=_owner_scope())

    logger.info(f"Todo deleted: {todo_id}")
    return jsonify({"todo": _serialize(row)})
