"""Shared test fixtures for todo-api."""

import os
import sqlite3
import tempfile

os.environ.setdefault("ENVIRONMENT", "test")

import pytest

from todo_api.main import app
from todo_api.config import settings
from todo_api.db import SCHEMA_PATH, get_core, init_db
from todo_api.auth import schemas, service, token as auth_token


TEST_EMAIL = "metalhead@gmail.com"
TEST_PASSWORD = "userOnePass"


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row
    db.execute("PRAGMA foreign_keys = ON")

    db.executescript(SCHEMA_PATH.read_text())
    db.commit()

    yield db

    db.close()


@pytest.fixture
def client():
    """Create test client for API testing.

    Uses a temp file database so every request's connection sees the same
    data. Each test gets a fresh database.
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    os.unlink(db_path)

    original_db_path = settings.database_path
    settings.database_path = db_path
    try:
        init_db()

        app.config['TESTING'] = True
        with app.test_client() as client:
            yield client

    finally:
        settings.database_path = original_db_path
        try:
            os.unlink(db_path)
        except FileNotFoundError:
            pass


@pytest.fixture
def require_todo_auth():
    """Turn on todos_require_auth for the duration of a test."""
    original = settings.todos_require_auth
    settings.todos_require_auth = True
    yield
    settings.todos_require_auth = original


@pytest.fixture
def test_user(test_db):
    """Create a user in the in-memory database.

    Returns a tuple of (user, password) where user is the UserResponse schema
    and password is the plain text password.
    """
    data = schemas.UserCreate(email=TEST_EMAIL, password=TEST_PASSWORD)
    user = service.create_user(test_db, data)
    test_db.commit()

    return user, TEST_PASSWORD


@pytest.fixture
def issued_token(test_db, test_user):
    """Issue a session token for test_user and return it."""
    user, _password = test_user
    raw_token = auth_token.issue_auth_token(test_db, user)
    test_db.commit()
    return raw_token


@pytest.fixture
def registered_user(client):
    """Create a user with one session in the client's database.

    Returns a tuple of (user, password, token).
    """
    with get_core(atomic=True) as core:
        data = schemas.UserCreate(email=TEST_EMAIL, password=TEST_PASSWORD)
        user = service.create_user(core.connection, data)
        raw_token = auth_token.issue_auth_token(core.connection, user)

    return user, TEST_PASSWORD, raw_token


@pytest.fixture
def auth_headers(registered_user):
    """Get request headers carrying registered_user's token."""
    _user, _password, raw_token = registered_user
    return {"x-auth": raw_token}


@pytest.fixture
def seeded_todos(client):
    """Insert two todos; the second one is completed.

    Returns the list of todo IDs.
    """
    with get_core(atomic=True) as core:
        first_id = core.todo.create("First test todo")
        second_id = core.todo.create("Second test todo")
        core.todo.update(second_id, {"completed": True, "completed_at": 333})

    return [first_id, second_id]
