"""Fixtures for API tests."""
import pytest

from core.config import Settings
from core.session import SESSION_COOKIE_NAME, create_session_token
from db.store import BookmarkStore, UserRecord
from services import user_service


@pytest.fixture
async def user(store: BookmarkStore) -> UserRecord:
    """A registered user."""
    return await user_service.create_user(store, "alice", "alice@example.com", "password123")


@pytest.fixture
def auth_headers(user: UserRecord, settings: Settings) -> dict[str, str]:
    """Cookie header carrying a valid session for ``user``."""
    token = create_session_token(user.id, settings)
    return {"Cookie": f"{SESSION_COOKIE_NAME}={token}"}


@pytest.fixture
async def other_auth_headers(store: BookmarkStore, settings: Settings) -> dict[str, str]:
    """Cookie header for a second, unrelated user."""
    other = await user_service.create_user(store, "bob", "bob@example.com", "password123")
    token = create_session_token(other.id, settings)
    return {"Cookie": f"{SESSION_COOKIE_NAME}={token}"}
