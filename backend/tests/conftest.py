"""
Blog Backend — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the whole suite.
How:   API tests get a fresh app per test backed by an in-memory SQLite
       database (aiosqlite); service tests get an AsyncMock store.

Fixture Hierarchy:
    test_settings ── app ── test_client ── register_user / auth_headers
    mock_store   (service unit tests, no database)
"""

import os
from datetime import datetime, timezone
from typing import AsyncGenerator, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Importing blog_api.main builds a module-level app from the environment;
# point it at SQLite before that happens
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from blog_api.config import Settings  # noqa: E402
from blog_api.main import create_app  # noqa: E402

TEST_JWT_SECRET = "test-secret-key-with-at-least-32-characters"
DEFAULT_PASSWORD = "secret123"


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory database and cheap bcrypt."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """
    A fresh application with its schema created.

    ASGITransport does not run the lifespan, so tables are created here.
    """
    application = create_app(test_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX client wired straight to the ASGI app.

    raise_app_exceptions=False lets tests observe the 500 response produced
    by the catch-all handler instead of the re-raised exception.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client):
    """
    Factory: register an account and return `(token, user)`.

    Usage:
        token, user = await register_user("alice@example.com", name="Alice")
    """

    async def _register(email: str, password: str = DEFAULT_PASSWORD, name: str = None):
        body = {"email": email, "password": password}
        if name is not None:
            body["name"] = name
        response = await test_client.post("/api/auth/register", json=body)
        assert response.status_code == 201, response.text
        data = response.json()
        return data["token"], data["user"]

    return _register


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bearer():
    """Builds the Authorization header for a token."""
    return auth_headers


# ══════════════════════════════════════════════════════════════════════════
# Service Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_store():
    """
    A BlogStore stand-in: every method is an AsyncMock.

    Usage:
        mock_store.find_post_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await service.get_post(mock_store, 1)
    """
    store = MagicMock()
    for name in (
        "find_user_by_email",
        "find_user_by_id",
        "create_user",
        "list_published_posts",
        "find_post_by_id",
        "create_post",
        "update_post",
        "delete_post",
        "find_comments_by_post",
        "find_comment_by_id",
        "create_comment",
        "update_comment",
        "delete_comment",
    ):
        setattr(store, name, AsyncMock())
    return store


def make_user(user_id: int = 1, email: str = "alice@example.com", name: str = "Alice"):
    user = MagicMock()
    user.id = user_id
    user.email = email
    user.name = name
    user.password = "$2b$04$notarealdigest"
    user.created_at = datetime(2024, 1, 15, tzinfo=timezone.utc)
    return user


def make_post(post_id: int = 1, author=None, published: bool = True, comments=None):
    author = author or make_user()
    post = MagicMock()
    post.id = post_id
    post.title = "Hello"
    post.content = "World"
    post.published = published
    post.author_id = author.id
    post.author = author
    post.created_at = datetime(2024, 1, 15, tzinfo=timezone.utc)
    post.comments = comments or []
    return post


def make_comment(comment_id: int = 1, post=None, author=None, text: str = "Nice post"):
    author = author or make_user()
    post = post or make_post(author=author)
    comment = MagicMock()
    comment.id = comment_id
    comment.text = text
    comment.post_id = post.id
    comment.post = post
    comment.author_id = author.id
    comment.author = author
    comment.created_at = datetime(2024, 1, 16, tzinfo=timezone.utc)
    return comment
