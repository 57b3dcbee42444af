"""Custom exceptions for the todo API.

Every exception carries a human-readable ``message`` and an optional
``details`` dict. Error handlers in ``main.py`` map each class to an HTTP
status code and a JSON error envelope.
"""


class TodoApiError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResourceNotFound(TodoApiError):
    """Raised when a resource is missing or its identifier is malformed."""


class ValidationError(TodoApiError):
    """Raised when request data fails validation."""


class DuplicateKeyError(ValidationError):
    """Raised when an insert violates a uniqueness constraint."""


class InvalidCredentialsError(TodoApiError):
    """Raised when login credentials do not match a stored user."""


class AuthenticationError(TodoApiError):
    """Raised when a request lacks a valid session token."""


class DatabaseError(TodoApiError):
    """Raised when the backing store fails."""
