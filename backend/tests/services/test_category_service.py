"""Tests for category operations, run against both stores."""
import pytest

from db.store import BookmarkStore
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services import bookmark_service, category_service, user_service
from services.exceptions import (
    CategoryNotEmptyError,
    CategoryNotFoundError,
    DuplicateCategoryNameError,
    EmptyNameError,
    InvalidCategoryIdError,
)


async def _user_id(store: BookmarkStore, email: str = "alice@example.com") -> int:
    user = await user_service.create_user(store, "user", email, "password123")
    return user.id


# =============================================================================
# create_category
# =============================================================================


async def test__create_category__trims_name(store: BookmarkStore) -> None:
    user_id = await _user_id(store)

    category = await category_service.create_category(store, user_id, "  Work  ")

    assert category.name == "Work"
    assert category.user_id == user_id
    assert category.bookmark_count == 0


@pytest.mark.parametrize("name", ["", "   "])
async def test__create_category__empty_name(store: BookmarkStore, name: str) -> None:
    user_id = await _user_id(store)

    with pytest.raises(EmptyNameError):
        await category_service.create_category(store, user_id, name)


async def test__create_category__duplicate_ignoring_case(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    await category_service.create_category(store, user_id, "Work")

    with pytest.raises(DuplicateCategoryNameError):
        await category_service.create_category(store, user_id, "work")


async def test__create_category__duplicate_ignoring_non_ascii_case(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    await category_service.create_category(store, user_id, "Ärger")

    with pytest.raises(DuplicateCategoryNameError):
        await category_service.create_category(store, user_id, "ärger")


async def test__list_categories__sorts_non_ascii_ignoring_case(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    for name in ("Zebra", "Émile", "éclair", "apple"):
        await category_service.create_category(store, user_id, name)

    categories = await category_service.list_categories(store, user_id)

    assert [c.name for c in categories] == ["apple", "Zebra", "éclair", "Émile"]


async def test__create_category__same_name_for_other_user(store: BookmarkStore) -> None:
    alice = await _user_id(store, "alice@example.com")
    bob = await _user_id(store, "bob@example.com")
    await category_service.create_category(store, alice, "Work")

    category = await category_service.create_category(store, bob, "Work")

    assert category.user_id == bob


# =============================================================================
# list_categories
# =============================================================================


async def test__list_categories__sorted_by_name_with_counts(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    other = await _user_id(store, "bob@example.com")
    await category_service.create_category(store, user_id, "zeta")
    alpha = await category_service.create_category(store, user_id, "Alpha")
    await category_service.create_category(store, user_id, "beta")
    await category_service.create_category(store, other, "Aardvark")
    for url in ("https://a.example", "https://b.example"):
        await bookmark_service.create_bookmark(
            store, user_id, BookmarkCreate(url=url, category_id=alpha.id),
        )

    categories = await category_service.list_categories(store, user_id)

    assert [(c.name, c.bookmark_count) for c in categories] == [
        ("Alpha", 2),
        ("beta", 0),
        ("zeta", 0),
    ]


# =============================================================================
# rename_category
# =============================================================================


async def test__rename_category__returns_renamed(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    category = await category_service.create_category(store, user_id, "Work")

    renamed = await category_service.rename_category(store, user_id, category.id, " Jobs ")

    assert renamed.id == category.id
    assert renamed.name == "Jobs"


async def test__rename_category__case_change_of_own_name(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    category = await category_service.create_category(store, user_id, "work")

    renamed = await category_service.rename_category(store, user_id, category.id, "Work")

    assert renamed.name == "Work"


async def test__rename_category__clash_with_other_category(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    await category_service.create_category(store, user_id, "Work")
    home = await category_service.create_category(store, user_id, "Home")

    with pytest.raises(DuplicateCategoryNameError):
        await category_service.rename_category(store, user_id, home.id, "WORK")


async def test__rename_category__not_found(store: BookmarkStore) -> None:
    user_id = await _user_id(store)

    with pytest.raises(CategoryNotFoundError):
        await category_service.rename_category(store, user_id, 999, "Anything")


async def test__rename_category__other_users_category(store: BookmarkStore) -> None:
    alice = await _user_id(store, "alice@example.com")
    bob = await _user_id(store, "bob@example.com")
    category = await category_service.create_category(store, alice, "Work")

    with pytest.raises(CategoryNotFoundError):
        await category_service.rename_category(store, bob, category.id, "Mine")


async def test__rename_category__empty_name(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    category = await category_service.create_category(store, user_id, "Work")

    with pytest.raises(EmptyNameError):
        await category_service.rename_category(store, user_id, category.id, "  ")


# =============================================================================
# delete_category
# =============================================================================


async def test__delete_category__empty_category(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    category = await category_service.create_category(store, user_id, "Work")

    await category_service.delete_category(store, user_id, category.id)

    assert await category_service.list_categories(store, user_id) == []


async def test__delete_category__not_empty_until_bookmark_moved(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    category = await category_service.create_category(store, user_id, "Work")
    bookmark = await bookmark_service.create_bookmark(
        store, user_id, BookmarkCreate(url="https://example.com", category_id=category.id),
    )

    with pytest.raises(CategoryNotEmptyError) as exc_info:
        await category_service.delete_category(store, user_id, category.id)
    assert exc_info.value.bookmark_count == 1

    await bookmark_service.update_bookmark(
        store, user_id, bookmark.id, BookmarkUpdate(category_id=None),
    )
    await category_service.delete_category(store, user_id, category.id)

    assert await category_service.list_categories(store, user_id) == []


async def test__delete_category__succeeds_after_bookmark_deleted(store: BookmarkStore) -> None:
    user_id = await _user_id(store)
    category = await category_service.create_category(store, user_id, "Work")
    bookmark = await bookmark_service.create_bookmark(
        store, user_id, BookmarkCreate(url="https://example.com", category="Work"),
    )
    assert bookmark.category_id == category.id

    await bookmark_service.delete_bookmark(store, user_id, bookmark.id)
    await category_service.delete_category(store, user_id, category.id)


async def test__delete_category__not_found(store: BookmarkStore) -> None:
    user_id = await _user_id(store)

    with pytest.raises(CategoryNotFoundError):
        await category_service.delete_category(store, user_id, 42)


# =============================================================================
# require_owned_category / get_or_create_category_id
# =============================================================================


@pytest.mark.parametrize("category_id", [0, -3, True, "1", 1.5, None])
async def test__require_owned_category__invalid_id(
    store: BookmarkStore,
    category_id: object,
) -> None:
    user_id = await _user_id(store)

    with pytest.raises(InvalidCategoryIdError):
        await category_service.require_owned_category(store, user_id, category_id)


async def test__get_or_create_category_id__reuses_existing_ignoring_case(
    store: BookmarkStore,
) -> None:
    user_id = await _user_id(store)
    existing = await category_service.create_category(store, user_id, "Work")

    assert await category_service.get_or_create_category_id(store, user_id, " work ") == existing.id
    assert len(await category_service.list_categories(store, user_id)) == 1


async def test__get_or_create_category_id__creates_missing(store: BookmarkStore) -> None:
    user_id = await _user_id(store)

    category_id = await category_service.get_or_create_category_id(store, user_id, " Reading ")

    [category] = await category_service.list_categories(store, user_id)
    assert category.id == category_id
    assert category.name == "Reading"


@pytest.mark.parametrize("name", [None, "", "   "])
async def test__get_or_create_category_id__blank_means_uncategorized(
    store: BookmarkStore,
    name: str | None,
) -> None:
    user_id = await _user_id(store)

    assert await category_service.get_or_create_category_id(store, user_id, name) is None
    assert await category_service.list_categories(store, user_id) == []
