"""Tests for db/user.py UserOperations class."""

import sqlite3

import pytest

from todo_api.db.user import UserOperations


class TestUserCreate:
    """Tests for UserOperations.create()."""

    def test_create_generates_uuid(self, test_db):
        ops = UserOperations(test_db)
        user_id = ops.create("a@b.com", "hash")

        assert len(user_id) == 36
        assert user_id.count("-") == 4

    def test_create_inserts_row(self, test_db):
        ops = UserOperations(test_db)
        user_id = ops.create("a@b.com", "hash")

        row = ops.get_by_id(user_id)
        assert row["email"] == "a@b.com"
        assert row["password_hash"] == "hash"
        assert row["created_at"] is not None

    def test_duplicate_email_violates_constraint(self, test_db):
        ops = UserOperations(test_db)
        ops.create("a@b.com", "hash")

        with pytest.raises(sqlite3.IntegrityError):
            ops.create("a@b.com", "other")

    def test_email_uniqueness_is_case_sensitive(self, test_db):
        """Emails are unique exactly as stored."""
        ops = UserOperations(test_db)
        ops.create("a@b.com", "hash")
        ops.create("A@b.com", "hash")

        assert ops.get_by_email("A@b.com") is not None


class TestUserLookup:
    """Tests for lookups."""

    def test_get_by_email_not_found(self, test_db):
        assert UserOperations(test_db).get_by_email("nobody@b.com") is None

    def test_get_by_id_not_found(self, test_db):
        assert UserOperations(test_db).get_by_id("missing") is None

    def test_set_password_hash(self, test_db):
        ops = UserOperations(test_db)
        user_id = ops.create("a@b.com", "hash")

        assert ops.set_password_hash(user_id, "new-hash") is True
        assert ops.get_by_id(user_id)["password_hash"] == "new-hash"

    def test_set_password_hash_unknown_user(self, test_db):
        assert UserOperations(test_db).set_password_hash("missing", "hash") is False


class TestTokenList:
    """Tests for the user's token list."""

    def test_push_token_appends_in_order(self, test_db):
        ops = UserOperations(test_db)
        user_id = ops.create("a@b.com", "hash")

        ops.push_token(user_id, "auth", "first")
        ops.push_token(user_id, "auth", "second")

        assert ops.list_tokens(user_id) == [
            {"access": "auth", "token": "first"},
            {"access": "auth", "token": "second"},
        ]

    def test_push_token_leaves_password_hash_alone(self, test_db):
        ops = UserOperations(test_db)
        user_id = ops.create("a@b.com", "hash")

        ops.push_token(user_id, "auth", "tok")

        assert ops.get_by_id(user_id)["password_hash"] == "hash"

    def test_find_by_token_requires_matching_entry(self, test_db):
        ops = UserOperations(test_db)
        user_id = ops.create("a@b.com", "hash")
        ops.push_token(user_id, "auth", "tok")

        assert ops.find_by_token(user_id, "auth", "tok")["id"] == user_id
        assert ops.find_by_token(user_id, "auth", "other") is None
        assert ops.find_by_token(user_id, "admin", "tok") is None

    def test_find_by_token_requires_matching_user(self, test_db):
        ops = UserOperations(test_db)
        first = ops.create("a@b.com", "hash")
        second = ops.create("c@d.com", "hash")
        ops.push_token(first, "auth", "tok")

        assert ops.find_by_token(second, "auth", "tok") is None

    def test_pull_token(self, test_db):
        ops = UserOperations(test_db)
        user_id = ops.create("a@b.com", "hash")
        ops.push_token(user_id, "auth", "keep")
        ops.push_token(user_id, "auth", "drop")

        assert ops.pull_token(user_id, "drop") is True
        assert ops.list_tokens(user_id) == [{"access": "auth", "token": "keep"}]
        assert ops.pull_token(user_id, "drop") is False
