"""Credential store: user creation, password hashing and verification.

Passwords are hashed with bcrypt using a fresh salt on every write. The
hash (salt and cost factor included, in bcrypt's standard "$2b$" encoding)
replaces the plaintext, which is never stored.

Hashing only happens in create_user() and set_password(). Other user
writes, such as pushing session tokens, leave the hash untouched.
"""

import logging
import sqlite3

import bcrypt

from ..config import settings
from ..db.user import UserOperations
from ..exceptions import DuplicateKeyError, InvalidCredentialsError, ValidationError
from .schemas import MIN_PASSWORD_LENGTH, UserCreate, UserResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str) -> str:
    """Hash a password with bcrypt and a freshly generated salt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


# Compared against when the email is unknown, so a failed lookup costs
# as much as a failed password check.
_DUMMY_HASH = None


def _dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("not-a-real-password")
    return _DUMMY_HASH


# ============================================================================
# Serialization
# ============================================================================


def _row_to_user(row: sqlite3.Row) -> UserResponse:
    return UserResponse(id=row["id"], email=row["email"])


def serialize_user(user: UserResponse) -> dict:
    """Project a user to its public JSON shape: {"_id", "email"}."""
    return user.model_dump(by_alias=True)


# ============================================================================
# User Operations
# ============================================================================


def create_user(conn: sqlite3.Connection, data: UserCreate) -> UserResponse:
    """
    Create a user with a hashed password.

    Args:
        conn: Database connection (caller commits)
        data: Validated signup data

    Returns:
        The created user

    Raises:
        DuplicateKeyError: If the email is already registered
    """
    users = UserOperations(conn)
    try:
        user_id = users.create(data.email, hash_password(data.password))
    except sqlite3.IntegrityError:
        logger.warning("Signup rejected: email already registered")
        raise DuplicateKeyError(
            "Email is already registered",
            {"field": "email"}
        )

    logger.info(f"User created: {user_id}")
    return UserResponse(id=user_id, email=data.email)


def set_password(conn: sqlite3.Connection, user_id: str, password: str) -> None:
    """
    Replace a user's password. The new password is hashed exactly once.

    Raises:
        ValidationError: If the password is too short or the user doesn't exist
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            {"field": "password"}
        )

    if not UserOperations(conn).set_password_hash(user_id, hash_password(password)):
        raise ValidationError("User does not exist", {"user_id": user_id})

    logger.info(f"Password changed for user {user_id}")


def get_user_by_id(conn: sqlite3.Connection, user_id: str) -> UserResponse | None:
    """Get a user by ID, or None."""
    row = UserOperations(conn).get_by_id(user_id)
    return _row_to_user(row) if row else None


def get_user_by_email(conn: sqlite3.Connection, email: str) -> UserResponse | None:
    """Get a user by exact email, or None."""
    row = UserOperations(conn).get_by_email(email)
    return _row_to_user(row) if row else None


def verify_credentials(conn: sqlite3.Connection, email: str, password: str) -> UserResponse:
    """
    Look up a user by email and check the password.

    Unknown emails and wrong passwords raise the same error so callers
    can't tell which one was wrong.

    Raises:
        InvalidCredentialsError: If no user matches
    """
    row = UserOperations(conn).get_by_email(email)
    if row is None:
        verify_password(password, _dummy_hash())
        logger.warning("Failed login attempt: unknown email")
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    if not verify_password(password, row["password_hash"]):
        logger.warning(f"Failed login attempt for user {row['id']}")
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    return _row_to_user(row)
