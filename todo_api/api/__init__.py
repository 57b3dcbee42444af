"""HTTP API blueprints for the todo API."""

from .todos import todos_bp

__all__ = ["todos_bp"]
