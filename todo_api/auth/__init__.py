"""Authentication module for the todo API.

This module provides authentication and session functionality:
- Schema validation for auth operations
- Password hashing and credential verification (service)
- Signed session tokens kept in each user's token list (token)
- x-auth header middleware for protected endpoints (decorators)

Endpoints:
- POST /users - Sign up
- POST /users/login - Authenticate and return a token in x-auth
- GET /users/me - Get current user info
- DELETE /users/me/token - Log out the current session
"""

from . import schemas, service, token

__all__ = ["schemas", "service", "token"]
