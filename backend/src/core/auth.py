"""Request authentication from the signed session cookie."""
from fastapi import Depends, Request

from core.config import Settings, get_settings
from core.session import SESSION_COOKIE_NAME, read_cookie_value, verify_session_token
from db.session import get_store
from db.store import BookmarkStore
from services import user_service
from services.exceptions import UnauthorizedError


async def resolve_user_id(
    store: BookmarkStore,
    cookie_header: str | None,
    settings: Settings,
) -> int:
    """
    Turn a raw Cookie header into the id of a live user.

    Raises:
        UnauthorizedError: If the session cookie is missing, the token is invalid
            or expired, or the user it names no longer exists. The caller cannot
            tell which.
    """
    token = read_cookie_value(cookie_header, SESSION_COOKIE_NAME)
    if not token:
        raise UnauthorizedError()

    claims = verify_session_token(token, settings)
    if claims is None:
        raise UnauthorizedError()

    user = await user_service.find_user_by_id(store, claims.user_id)
    if user is None:
        raise UnauthorizedError()

    return user.id


async def get_current_user_id(
    request: Request,
    store: BookmarkStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> int:
    """Dependency that authenticates the request and returns the user id."""
    return await resolve_user_id(store, request.headers.get("cookie"), settings)
