"""Service layer for user accounts and credential checks."""
import asyncio
import logging
import time

from core.passwords import hash_password, verify_password
from db.store import BookmarkStore, UserRecord
from services.exceptions import DuplicateEmailError

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are compared and stored trimmed and lowercased."""
    return email.strip().lower()


async def find_user_by_email(store: BookmarkStore, email: str) -> UserRecord | None:
    """Case-insensitive email lookup. Returns None if there is no such user."""
    user = await store.get_user_by_email(normalize_email(email))
    return user.to_public() if user else None


async def find_user_by_id(store: BookmarkStore, user_id: int) -> UserRecord | None:
    """Get a user by id. Returns None if there is no such user."""
    user = await store.get_user_by_id(user_id)
    return user.to_public() if user else None


async def create_user(
    store: BookmarkStore,
    username: str,
    email: str,
    password: str,
) -> UserRecord:
    """
    Register a new user.

    Args:
        store: Persistence backend.
        username: Display name (trimmed).
        email: Email address (normalized to trimmed lowercase).
        password: Plain-text password. Only its scrypt credential is stored.

    Returns:
        The public projection of the created user.

    Raises:
        DuplicateEmailError: If an account already uses this email in any letter case.
    """
    normalized = normalize_email(email)
    if await store.get_user_by_email(normalized) is not None:
        raise DuplicateEmailError(normalized)

    # scrypt is CPU and memory bound; keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, password)
    user = await store.insert_user(
        username=username.strip(),
        email=normalized,
        password_hash=password_hash,
        created_at=int(time.time()),
    )
    logger.info("Registered user %s", user.id)
    return user.to_public()


async def verify_credentials(
    store: BookmarkStore,
    email: str,
    password: str,
) -> UserRecord | None:
    """
    Check an email/password pair.

    Returns:
        The public user if the password matches, None if the email is unknown or
        the password is wrong. The two cases are indistinguishable to the caller.
    """
    user = await store.get_user_by_email(normalize_email(email))
    if user is None:
        return None

    if not await asyncio.to_thread(verify_password, password, user.password_hash):
        logger.info("Rejected credentials for user %s", user.id)
        return None

    return user.to_public()
