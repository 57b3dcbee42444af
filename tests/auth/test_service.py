"""Tests for auth service module.

Tests password hashing, user creation, and credential verification.
"""

import sqlite3

import pytest

from todo_api.auth import service
from todo_api.auth.schemas import UserCreate, UserResponse
from todo_api.exceptions import DuplicateKeyError, InvalidCredentialsError, ValidationError


# ============================================================================
# Password Hashing and Verification Tests
# ============================================================================


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_bcrypt_string(self):
        hashed = service.hash_password("secret1")
        assert isinstance(hashed, str)
        assert len(hashed) == 60  # Bcrypt hashes are always 60 characters

    def test_hash_password_uses_ten_rounds(self):
        assert service.hash_password("secret1").startswith("$2b$10$")

    def test_hash_password_different_hashes(self):
        """Same password should produce different hashes (due to salt)."""
        assert service.hash_password("secret1") != service.hash_password("secret1")

    def test_verify_password_valid(self):
        hashed = service.hash_password("secret1")
        assert service.verify_password("secret1", hashed) is True

    def test_verify_password_invalid(self):
        hashed = service.hash_password("secret1")
        assert service.verify_password("secret2", hashed) is False

    def test_verify_password_unicode(self):
        hashed = service.hash_password("secret🔒")
        assert service.verify_password("secret🔒", hashed) is True
        assert service.verify_password("secret", hashed) is False

    def test_verify_password_malformed_hash(self):
        assert service.verify_password("secret1", "not-a-hash") is False


# ============================================================================
# User Creation Tests
# ============================================================================


class TestCreateUser:
    """Tests for create_user."""

    def test_create_user_returns_user_response(self, test_db: sqlite3.Connection):
        user = service.create_user(test_db, UserCreate(email="a@b.com", password="secret1"))

        assert isinstance(user, UserResponse)
        assert user.id is not None
        assert user.email == "a@b.com"
        assert not hasattr(user, "password_hash")

    def test_create_user_hashes_password(self, test_db: sqlite3.Connection):
        """Password should be hashed, not stored in plain text."""
        service.create_user(test_db, UserCreate(email="a@b.com", password="secret1"))

        row = test_db.execute(
            "SELECT password_hash FROM users WHERE email = ?", ("a@b.com",)
        ).fetchone()
        assert row["password_hash"] != "secret1"
        assert row["password_hash"].startswith("$2b$")

    def test_create_user_duplicate_email_raises_duplicate_key(self, test_db: sqlite3.Connection):
        data = UserCreate(email="a@b.com", password="secret1")
        service.create_user(test_db, data)

        with pytest.raises(DuplicateKeyError):
            service.create_user(test_db, UserCreate(email="a@b.com", password="another1"))

    def test_create_user_starts_with_no_tokens(self, test_db: sqlite3.Connection):
        user = service.create_user(test_db, UserCreate(email="a@b.com", password="secret1"))

        count = test_db.execute(
            "SELECT COUNT(*) FROM user_tokens WHERE user_id = ?", (user.id,)
        ).fetchone()[0]
        assert count == 0


class TestSetPassword:
    """Tests for set_password."""

    def test_set_password_rehashes(self, test_db, test_user):
        user, password = test_user

        service.set_password(test_db, user.id, "brandnew")

        service.verify_credentials(test_db, user.email, "brandnew")
        with pytest.raises(InvalidCredentialsError):
            service.verify_credentials(test_db, user.email, password)

    def test_set_password_too_short(self, test_db, test_user):
        user, _password = test_user

        with pytest.raises(ValidationError):
            service.set_password(test_db, user.id, "short")

    def test_set_password_unknown_user(self, test_db):
        with pytest.raises(ValidationError):
            service.set_password(test_db, "missing", "longenough")


# ============================================================================
# Lookup and Verification Tests
# ============================================================================


class TestLookup:
    """Tests for user lookups."""

    def test_get_user_by_id(self, test_db, test_user):
        user, _password = test_user
        assert service.get_user_by_id(test_db, user.id) == user

    def test_get_user_by_id_not_found(self, test_db):
        assert service.get_user_by_id(test_db, "missing") is None

    def test_get_user_by_email(self, test_db, test_user):
        user, _password = test_user
        assert service.get_user_by_email(test_db, user.email) == user

    def test_get_user_by_email_not_found(self, test_db):
        assert service.get_user_by_email(test_db, "nobody@b.com") is None


class TestVerifyCredentials:
    """Tests for verify_credentials."""

    def test_valid_credentials(self, test_db, test_user):
        user, password = test_user
        assert service.verify_credentials(test_db, user.email, password) == user

    def test_wrong_password(self, test_db, test_user):
        user, _password = test_user
        with pytest.raises(InvalidCredentialsError):
            service.verify_credentials(test_db, user.email, "wrongpass")

    def test_unknown_email_same_error_as_wrong_password(self, test_db, test_user):
        """Failures must not reveal which of email or password was wrong."""
        user, _password = test_user

        with pytest.raises(InvalidCredentialsError) as unknown:
            service.verify_credentials(test_db, "nobody@b.com", "whatever")
        with pytest.raises(InvalidCredentialsError) as wrong:
            service.verify_credentials(test_db, user.email, "whatever")

        assert unknown.value.message == wrong.value.message
        assert unknown.value.details == wrong.value.details


class TestSerializeUser:
    """Tests for serialize_user."""

    def test_serialize_user_shape(self):
        user = UserResponse(id="550e8400-e29b-41d4-a716-446655440000", email="a@b.com")
        assert service.serialize_user(user) == {
            "_id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "a@b.com",
        }
