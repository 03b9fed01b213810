"""Shared test fixtures for meme-api."""

import sqlite3

import pytest

from meme_api.auth import service
from meme_api.auth.schemas import UserCreate
from meme_api.auth.token import get_signer
from meme_api.config import Settings
from meme_api.db import Core, get_core
from meme_api.main import create_app
from meme_api.schema import SCHEMA_PATH

TEST_SECRET = "test-secret-key-0123456789abcdefghij"
TEST_WORK_FACTOR = 4


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
def core(test_db):
    """Core bound to the in-memory test database."""
    return Core(test_db)


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a per-test temp-file database.

    bcrypt work factor 4 keeps hashing fast while still exercising bcrypt.
    """
    return Settings(
        jwt_secret=TEST_SECRET,
        database_path=str(tmp_path / "memes.db"),
        bcrypt_work_factor=TEST_WORK_FACTOR,
    )


@pytest.fixture
def app(test_settings):
    """Application built from injected test settings."""
    app = create_app(test_settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def test_user(app):
    """Register a user directly in the app's database.

    Returns a tuple of (user, password) where user is the UserResponse schema.
    """
    password = "TestPass123"
    with get_core(atomic=True, database_path=app.config["DATABASE_PATH"]) as core:
        user = service.register_user(
            core,
            UserCreate(username="testuser", password=password),
            rounds=TEST_WORK_FACTOR,
        )
    return user, password


@pytest.fixture
def jwt_token(app, test_user):
    """Generate a JWT token for the test user with the app's signer."""
    user, _password = test_user
    with app.app_context():
        return get_signer().issue(user.id, user.username)


@pytest.fixture
def auth_headers(jwt_token):
    """Get authentication headers with JWT token."""
    return {"Authorization": f"Bearer {jwt_token}"}
