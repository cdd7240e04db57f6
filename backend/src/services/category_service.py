"""Service layer for category operations."""
import logging
import time

from db.store import BookmarkStore, CategoryRecord
from services.exceptions import (
    CategoryNotEmptyError,
    CategoryNotFoundError,
    DuplicateCategoryNameError,
    EmptyNameError,
    InvalidCategoryIdError,
)

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    trimmed = name.strip()
    if not trimmed:
        raise EmptyNameError()
    return trimmed


async def list_categories(store: BookmarkStore, user_id: int) -> list[CategoryRecord]:
    """Get the user's categories sorted by name, each with its bookmark count."""
    return await store.list_categories(user_id)


async def create_category(store: BookmarkStore, user_id: int, name: str) -> CategoryRecord:
    """
    Create a category for a user.

    Raises:
        EmptyNameError: If the name is blank after trimming.
        DuplicateCategoryNameError: If the user already has this name in any letter case.
    """
    trimmed = _clean_name(name)
    if await store.find_category_by_name(user_id, trimmed) is not None:
        raise DuplicateCategoryNameError(trimmed)
    return await store.insert_category(user_id, trimmed, int(time.time()))


async def rename_category(
    store: BookmarkStore,
    user_id: int,
    category_id: int,
    name: str,
) -> CategoryRecord:
    """
    Rename one of the user's categories.

    Renaming to the same name in a different case is allowed, since the only
    match is the category itself.

    Raises:
        EmptyNameError: If the name is blank after trimming.
        CategoryNotFoundError: If the category doesn't exist or isn't the user's.
        DuplicateCategoryNameError: If another of the user's categories has this name.
    """
    trimmed = _clean_name(name)
    if await store.get_category(user_id, category_id) is None:
        raise CategoryNotFoundError(category_id)

    duplicate = await store.find_category_by_name(user_id, trimmed, exclude_id=category_id)
    if duplicate is not None:
        raise DuplicateCategoryNameError(trimmed)

    await store.rename_category(user_id, category_id, trimmed)
    renamed = await store.get_category(user_id, category_id)
    if renamed is None:
        raise CategoryNotFoundError(category_id)
    return renamed


async def delete_category(store: BookmarkStore, user_id: int, category_id: int) -> None:
    """
    Delete one of the user's categories.

    Raises:
        CategoryNotFoundError: If the category doesn't exist or isn't the user's.
        CategoryNotEmptyError: If any of the user's bookmarks still use it.
    """
    category = await store.get_category(user_id, category_id)
    if category is None:
        raise CategoryNotFoundError(category_id)
    if category.bookmark_count > 0:
        raise CategoryNotEmptyError(category_id, category.bookmark_count)

    await store.delete_category(user_id, category_id)
    logger.info("Deleted category %s for user %s", category_id, user_id)


async def require_owned_category(
    store: BookmarkStore,
    user_id: int,
    category_id: object,
) -> int:
    """
    Check that an explicit category id is valid and belongs to the user.

    Raises:
        InvalidCategoryIdError: If the id is not a positive integer.
        CategoryNotFoundError: If no such category exists for the user.
    """
    if isinstance(category_id, bool) or not isinstance(category_id, int) or category_id <= 0:
        raise InvalidCategoryIdError(category_id)
    if await store.get_category(user_id, category_id) is None:
        raise CategoryNotFoundError(category_id)
    return category_id


async def get_or_create_category_id(
    store: BookmarkStore,
    user_id: int,
    name: str | None,
) -> int | None:
    """
    Resolve a category name to an id, creating the category if the user has none by that name.

    Matching ignores case, so "work" reuses an existing "Work". A missing or blank
    name means uncategorized.
    """
    if name is None or not name.strip():
        return None

    trimmed = name.strip()
    existing = await store.find_category_by_name(user_id, trimmed)
    if existing is not None:
        return existing.id

    created = await store.insert_category(user_id, trimmed, int(time.time()))
    return created.id
