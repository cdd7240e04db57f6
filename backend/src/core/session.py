"""
Stateless session tokens.

A token is ``{user_id}.{expires_at}.{signature}`` where the signature is the
hex HMAC-SHA256 of ``{user_id}.{expires_at}`` under the server secret. Nothing
is stored server-side: a token is valid while its signature matches and its
expiry is not in the past. Tokens cannot be revoked early; logging out only
clears the client cookie.
"""
import hashlib
import hmac
import re
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

from core.config import Settings

SESSION_COOKIE_NAME = "bookmark_session"
SESSION_TTL_SECONDS = 60 * 60 * 24 * 7

# Ids and unix timestamps never need more than 15 digits
_DIGITS = re.compile(r"[0-9]{1,15}")


@dataclass(frozen=True)
class SessionClaims:
    """Identity asserted by a valid session token."""

    user_id: int
    expires_at: int


def _sign(payload: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def _parse_positive_int(value: str) -> int | None:
    if not _DIGITS.fullmatch(value):
        return None
    parsed = int(value)
    return parsed if parsed > 0 else None


def create_session_token(user_id: int, settings: Settings, now: int | None = None) -> str:
    """Mint a signed token for user_id that expires SESSION_TTL_SECONDS from now."""
    issued_at = int(time.time()) if now is None else now
    expires_at = issued_at + SESSION_TTL_SECONDS
    payload = f"{user_id}.{expires_at}"
    return f"{payload}.{_sign(payload, settings.session_secret)}"


def verify_session_token(
    token: str,
    settings: Settings,
    now: int | None = None,
) -> SessionClaims | None:
    """
    Validate a session token.

    Returns:
        SessionClaims if the token is well formed, unexpired and correctly
        signed; None otherwise. Never raises for malformed input.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None

    user_id = _parse_positive_int(parts[0])
    expires_at = _parse_positive_int(parts[1])
    incoming_signature = parts[2]
    if user_id is None or expires_at is None or not incoming_signature:
        return None

    current = int(time.time()) if now is None else now
    if expires_at < current:
        return None

    expected = _sign(f"{user_id}.{expires_at}", settings.session_secret).encode("ascii")
    incoming = incoming_signature.encode("utf-8")
    if len(incoming) != len(expected):
        return None
    if not hmac.compare_digest(incoming, expected):
        return None

    return SessionClaims(user_id=user_id, expires_at=expires_at)


def read_cookie_value(cookie_header: str | None, name: str) -> str | None:
    """Find a cookie by name in a raw Cookie header and URL-decode its value."""
    if not cookie_header:
        return None

    for segment in cookie_header.split(";"):
        key, _, value = segment.strip().partition("=")
        if key == name:
            return unquote(value)
    return None


def session_cookie_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for ``Response.set_cookie`` when issuing a session."""
    return {
        "httponly": True,
        "samesite": "lax",
        "secure": settings.is_production,
        "path": "/",
        "max_age": SESSION_TTL_SECONDS,
    }
