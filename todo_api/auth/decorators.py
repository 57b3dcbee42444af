"""Authentication decorators for protected endpoints.

Clients send the session token in the ``x-auth`` request header. On success
the authenticated user is stored in flask.g:
- g.user: UserResponse
- g.user_id: User ID (UUID)
- g.token: The raw token the request was authenticated with
"""

import logging
from functools import wraps

from flask import g, request

from ..db import get_core
from ..exceptions import AuthenticationError
from . import token

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-auth"


def authenticate_request():
    """
    Resolve the request's x-auth token and store the user in flask.g.

    Raises:
        AuthenticationError: If the token is missing or not valid
    """
    raw_token = request.headers.get(AUTH_HEADER, "")

    core = get_core()
    user = token.resolve_auth_token(core.connection, raw_token)

    g.user = user
    g.user_id = user.id
    g.token = raw_token
    logger.debug(f"Authenticated request for user {user.id}")


def authenticate_if_present():
    """
    Authenticate when an x-auth header is sent, otherwise do nothing.

    An invalid token does not fail the request; it is logged and the request
    continues as anonymous.

    Returns:
        The user ID, or None for anonymous requests or invalid tokens
    """
    if not request.headers.get(AUTH_HEADER):
        return None

    try:
        authenticate_request()
    except AuthenticationError:
        logger.warning(f"Ignoring invalid x-auth token on {request.method} {request.path}")
        return None
    return g.user_id


def auth_required(f):
    """
    Decorator to require a valid x-auth token for endpoint access.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)

    return wrapper
