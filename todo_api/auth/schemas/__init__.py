"""Authentication Pydantic schemas for API validation."""

from .auth import (
    AUTH_ACCESS,
    MIN_PASSWORD_LENGTH,
    TokenPayload,
    UserBase,
    UserCreate,
    UserLogin,
    UserResponse,
)

__all__ = [
    "AUTH_ACCESS",
    "MIN_PASSWORD_LENGTH",
    "TokenPayload",
    "UserBase",
    "UserCreate",
    "UserLogin",
    "UserResponse",
]
