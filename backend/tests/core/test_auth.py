"""Tests for resolving the signed-in user from the Cookie header."""
import pytest

from core.auth import resolve_user_id
from core.config import Settings
from core.session import SESSION_COOKIE_NAME, SESSION_TTL_SECONDS, create_session_token
from db.store import BookmarkStore
from services import user_service
from services.exceptions import UnauthorizedError


async def _make_user(store: BookmarkStore) -> int:
    user = await user_service.create_user(store, "alice", "alice@example.com", "password123")
    return user.id


async def test__resolve_user_id__valid_cookie(store: BookmarkStore, settings: Settings) -> None:
    user_id = await _make_user(store)
    token = create_session_token(user_id, settings)

    resolved = await resolve_user_id(store, f"a=1; {SESSION_COOKIE_NAME}={token}", settings)

    assert resolved == user_id


@pytest.mark.parametrize("cookie_header", [None, "", "theme=dark", f"{SESSION_COOKIE_NAME}="])
async def test__resolve_user_id__missing_cookie(
    store: BookmarkStore,
    settings: Settings,
    cookie_header: str | None,
) -> None:
    with pytest.raises(UnauthorizedError):
        await resolve_user_id(store, cookie_header, settings)


async def test__resolve_user_id__tampered_token(store: BookmarkStore, settings: Settings) -> None:
    user_id = await _make_user(store)
    token = create_session_token(user_id, settings)
    tampered = token[:-1] + ("0" if token[-1] != "0" else "1")

    with pytest.raises(UnauthorizedError):
        await resolve_user_id(store, f"{SESSION_COOKIE_NAME}={tampered}", settings)


async def test__resolve_user_id__expired_token(store: BookmarkStore, settings: Settings) -> None:
    user_id = await _make_user(store)
    token = create_session_token(user_id, settings, now=1_000_000 - SESSION_TTL_SECONDS - 1)

    with pytest.raises(UnauthorizedError):
        await resolve_user_id(store, f"{SESSION_COOKIE_NAME}={token}", settings)


async def test__resolve_user_id__unknown_user(store: BookmarkStore, settings: Settings) -> None:
    """A correctly signed token for a user that doesn't exist is rejected."""
    token = create_session_token(999, settings)

    with pytest.raises(UnauthorizedError):
        await resolve_user_id(store, f"{SESSION_COOKIE_NAME}={token}", settings)
