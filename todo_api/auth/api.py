"""User and session endpoints.

- POST   /users           - Sign up, returns the user and a token in x-auth
- POST   /users/login     - Log in, returns the user and a new token in x-auth
- GET    /users/me        - Current user (requires x-auth)
- DELETE /users/me/token  - Log out: remove the current token (requires x-auth)

All endpoints return JSON responses. Users are serialized as {"_id", "email"}.
"""

import logging

from flask import Blueprint, g, jsonify

from ..api.validation import validate_request
from ..db import get_core
from . import service, token
from .decorators import AUTH_HEADER, auth_required
from .schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)


# Create blueprint
users_bp = Blueprint("users", __name__, url_prefix="/users")


@users_bp.post("")
@validate_request
def signup(data: UserCreate):
    """
    Create a user and start a session.

    Example request:
    ```json
    {"email": "a@b.com", "password": "secret1"}
    ```

    Example response (x-auth header carries the token):
    ```json
    {"_id": "550e8400-e29b-41d4-a716-446655440000", "email": "a@b.com"}
    ```

    Returns:
        200: Serialized user
        400: Invalid email, short password or email already registered
    """
    with get_core(atomic=True) as core:
        user = service.create_user(core.connection, data)
        auth_token = token.issue_auth_token(core.connection, user)

    return jsonify(service.serialize_user(user)), 200, {AUTH_HEADER: auth_token}


@users_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Verify credentials and issue a new session token.

    Returns:
        200: Serialized user, token in x-auth header
        400: Invalid email or password (same error for both)
    """
    with get_core(atomic=True) as core:
        user = service.verify_credentials(core.connection, data.email, data.password)
        auth_token = token.issue_auth_token(core.connection, user)

    logger.info(f"Successful login: {user.id}")
    return jsonify(service.serialize_user(user)), 200, {AUTH_HEADER: auth_token}


@users_bp.get("/me")
@auth_required
def get_current_user():
    """
    Get the user the x-auth token belongs to.

    Returns:
        200: Serialized user
        401: Missing or invalid token
    """
    return jsonify(service.serialize_user(g.user)), 200


@users_bp.delete("/me/token")
@auth_required
def logout():
    """
    Remove the request's token from the user's token list.

    Other sessions of the same user stay valid.

    Returns:
        200: Logout confirmation
        401: Missing or invalid token
    """
    with get_core(atomic=True) as core:
        token.revoke_auth_token(core.connection, g.user_id, g.token)

    return jsonify({"message": "Logged out successfully"}), 200
