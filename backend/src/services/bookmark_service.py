"""Service layer for bookmark CRUD operations."""
import logging
import time
from urllib.parse import urlparse

from db.store import BookmarkRecord, BookmarkStore
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.category_service import get_or_create_category_id, require_owned_category
from services.exceptions import BookmarkNotFoundError, InvalidLimitError

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 24
MAX_LIST_LIMIT = 100
UNTITLED = "Untitled"


def title_from_url(url: str) -> str:
    """
    Derive a default title from a URL's hostname without a leading "www.".

    Returns "Untitled" when the URL has no parseable host.
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return UNTITLED
    if not hostname:
        return UNTITLED
    return hostname.removeprefix("www.") or UNTITLED


async def list_bookmarks(
    store: BookmarkStore,
    user_id: int,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[BookmarkRecord]:
    """
    Get the user's most recent bookmarks, newest first.

    Limits above MAX_LIST_LIMIT are capped.

    Raises:
        InvalidLimitError: If limit is below 1.
    """
    if limit < 1:
        raise InvalidLimitError(limit)
    return await store.list_bookmarks(user_id, min(limit, MAX_LIST_LIMIT))


async def get_bookmark(
    store: BookmarkStore,
    user_id: int,
    bookmark_id: int,
) -> BookmarkRecord:
    """
    Get a bookmark by ID, scoped to user.

    Raises:
        BookmarkNotFoundError: If not found or owned by another user.
    """
    bookmark = await store.get_bookmark(user_id, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return bookmark


async def create_bookmark(
    store: BookmarkStore,
    user_id: int,
    data: BookmarkCreate,
) -> BookmarkRecord:
    """
    Create a new bookmark for a user.

    A missing or blank title falls back to the URL's hostname. The category comes
    from ``category_id`` when it was sent (null meaning uncategorized); otherwise
    ``category`` is resolved by name, creating the category if needed.

    Raises:
        InvalidCategoryIdError: If category_id is not a positive integer.
        CategoryNotFoundError: If category_id is not one of the user's categories.
    """
    title = (data.title or "").strip() or title_from_url(data.url)
    description = (data.description or "").strip()
    tags = [tag for tag in data.tags if tag]

    if "category_id" in data.model_fields_set:
        category_id = (
            None if data.category_id is None
            else await require_owned_category(store, user_id, data.category_id)
        )
    else:
        category_id = await get_or_create_category_id(store, user_id, data.category)

    return await store.insert_bookmark(
        user_id=user_id,
        url=data.url,
        title=title,
        description=description,
        tags=tags,
        category_id=category_id,
        created_at=int(time.time()),
    )


async def update_bookmark(
    store: BookmarkStore,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> BookmarkRecord:
    """
    Partially update a bookmark.

    Fields that were not sent (or sent as null, except category_id) keep their
    value. An update with no fields is a no-op that returns the bookmark as is.

    Raises:
        BookmarkNotFoundError: If not found or owned by another user.
        InvalidCategoryIdError: If category_id is not a positive integer.
        CategoryNotFoundError: If category_id is not one of the user's categories.
    """
    existing = await get_bookmark(store, user_id, bookmark_id)

    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        return existing

    category_id = existing.category_id
    if "category_id" in update_data:
        category_id = (
            None if data.category_id is None
            else await require_owned_category(store, user_id, data.category_id)
        )

    url = data.url if data.url is not None else existing.url
    title = existing.title
    if data.title is not None:
        title = data.title.strip() or title_from_url(url)
    description = existing.description
    if data.description is not None:
        description = data.description.strip()

    await store.update_bookmark(
        user_id=user_id,
        bookmark_id=bookmark_id,
        url=url,
        title=title,
        description=description,
        tags=data.tags if data.tags is not None else existing.tags,
        category_id=category_id,
    )
    return await get_bookmark(store, user_id, bookmark_id)


async def delete_bookmark(store: BookmarkStore, user_id: int, bookmark_id: int) -> None:
    """
    Delete a bookmark.

    Raises:
        BookmarkNotFoundError: If not found or owned by another user.
    """
    await get_bookmark(store, user_id, bookmark_id)
    await store.delete_bookmark(user_id, bookmark_id)
    logger.info("Deleted bookmark %s for user %s", bookmark_id, user_id)
