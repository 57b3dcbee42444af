"""Session token service.

Tokens are JWTs signed with the process-wide secret from settings. A token
is only accepted if its signature verifies AND the exact token string is
still in the owner's token list. Removing it from the list (logout)
invalidates it even though the signature stays valid.

Tokens carry no expiry unless settings.jwt_expiry_days is set.
"""

import logging
import sqlite3
from datetime import timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..config import settings
from ..db.user import UserOperations
from ..exceptions import AuthenticationError
from ..utils import isodatetime, uid
from .schemas import AUTH_ACCESS, TokenPayload, UserResponse

logger = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = "Authentication required"


def _build_payload(user: UserResponse) -> dict:
    issued_at = isodatetime.now_unix()
    payload = {
        "_id": user.id,
        "access": AUTH_ACCESS,
        "iat": issued_at,
        # Distinguishes sessions issued within the same second
        "jti": uid.generate_uuid(),
    }
    if settings.jwt_expiry_days is not None:
        payload["exp"] = issued_at + int(timedelta(days=settings.jwt_expiry_days).total_seconds())
    return payload


def sign_payload(payload: dict) -> str:
    """Sign claims with the configured secret key."""
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_auth_token(token: str) -> TokenPayload:
    """
    Verify a token's signature (and expiry, if present) and parse its claims.

    Raises:
        jwt.InvalidTokenError: If the signature, format or expiry is invalid,
            or the claims are not an auth payload
    """
    claims = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
    )
    try:
        return TokenPayload.model_validate(claims)
    except PydanticValidationError as e:
        raise jwt.InvalidTokenError(f"Malformed token payload: {e.error_count()} error(s)")


def issue_auth_token(conn: sqlite3.Connection, user: UserResponse) -> str:
    """
    Sign a new session token and append it to the user's token list.

    Earlier tokens stay valid, so a user can hold several sessions.

    Args:
        conn: Database connection (caller commits)
        user: The authenticated user

    Returns:
        The raw token string
    """
    token = sign_payload(_build_payload(user))
    UserOperations(conn).push_token(user.id, AUTH_ACCESS, token)

    logger.info(f"Auth token issued for user {user.id}")
    return token


def resolve_auth_token(conn: sqlite3.Connection, token: str | None) -> UserResponse:
    """
    Find the user a session token belongs to.

    Raises:
        AuthenticationError: For every failure (missing, tampered, malformed,
            expired or removed token), always with the same message
    """
    if not token:
        raise AuthenticationError(UNAUTHENTICATED_MESSAGE)

    try:
        payload = decode_auth_token(token)
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected auth token: {e.__class__.__name__}")
        raise AuthenticationError(UNAUTHENTICATED_MESSAGE)

    row = UserOperations(conn).find_by_token(payload.user_id, AUTH_ACCESS, token)
    if row is None:
        logger.warning(f"Rejected auth token: not in token list of user {payload.user_id}")
        raise AuthenticationError(UNAUTHENTICATED_MESSAGE)

    return UserResponse(id=row["id"], email=row["email"])


def revoke_auth_token(conn: sqlite3.Connection, user_id: str, token: str) -> bool:
    """
    Remove a token from the user's token list.

    Returns:
        True if the token was in the list
    """
    removed = UserOperations(conn).pull_token(user_id, token)
    if removed:
        logger.info(f"Auth token revoked for user {user_id}")
    return removed
