"""BookmarkStore backed by Cloudflare D1."""
import json
from typing import Any

from sqlalchemy import and_, delete, func, insert, select, update

from db.d1_client import BackendError, D1Client
from db.store import (
    UNCATEGORIZED,
    BookmarkRecord,
    BookmarkStore,
    CategoryRecord,
    UserAuthRecord,
)
from models.bookmark import Bookmark
from models.category import Category
from models.user import User


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_tags(value: Any) -> list[str]:
    """
    Decode a stored tags value.

    Accepts a JSON array string or an already-decoded list; anything else (including
    invalid JSON) yields an empty list. Non-string and empty entries are dropped.
    """
    if isinstance(value, str):
        if not value.strip() or value in ("undefined", "null"):
            return []
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, list):
        return []
    return [tag for tag in value if isinstance(tag, str) and tag]


def _user_from_row(row: dict[str, Any]) -> UserAuthRecord:
    return UserAuthRecord(
        id=_to_int(row.get("id")),
        username=str(row.get("username") or "").strip(),
        email=str(row.get("email") or "").strip().lower(),
        created_at=_to_int(row.get("created_at")),
        password_hash=str(row.get("password_hash") or ""),
    )


def _category_from_row(row: dict[str, Any]) -> CategoryRecord:
    return CategoryRecord(
        id=_to_int(row.get("id")),
        user_id=_to_int(row.get("user_id")),
        name=str(row.get("name") or ""),
        bookmark_count=_to_int(row.get("bookmark_count")),
    )


def _bookmark_from_row(row: dict[str, Any]) -> BookmarkRecord:
    category_id = row.get("category_id")
    return BookmarkRecord(
        id=_to_int(row.get("id")),
        user_id=_to_int(row.get("user_id")),
        title=str(row.get("title") or ""),
        url=str(row.get("url") or ""),
        description=str(row.get("description") or ""),
        category_id=None if category_id is None else _to_int(category_id),
        category=str(row.get("category") or UNCATEGORIZED),
        created_at=_to_int(row.get("created_at")),
        tags=parse_tags(row.get("tags")),
    )


_USER_COLUMNS = (User.id, User.username, User.email, User.password_hash, User.created_at)

_BOOKMARK_COLUMNS = (
    Bookmark.id,
    Bookmark.user_id,
    Bookmark.title,
    Bookmark.url,
    Bookmark.description,
    Bookmark.tags,
    Bookmark.category_id,
    Bookmark.created_at,
    Category.name.label("category"),
)


def _categories_with_counts(user_id: int):  # noqa: ANN202
    """Select the user's categories with a LEFT JOIN count of their bookmarks."""
    return (
        select(
            Category.id,
            Category.user_id,
            Category.name,
            func.count(Bookmark.id).label("bookmark_count"),
        )
        .outerjoin(
            Bookmark,
            and_(Bookmark.category_id == Category.id, Bookmark.user_id == user_id),
        )
        .where(Category.user_id == user_id)
        .group_by(Category.id, Category.user_id, Category.name)
    )


def _bookmarks_with_category(user_id: int):  # noqa: ANN202
    """Select the user's bookmarks joined to their (same-user) category."""
    return (
        select(*_BOOKMARK_COLUMNS)
        .outerjoin(
            Category,
            and_(Category.id == Bookmark.category_id, Category.user_id == Bookmark.user_id),
        )
        .where(Bookmark.user_id == user_id)
    )


class D1Store(BookmarkStore):
    """Runs every store operation as SQL through a D1Client."""

    name = "d1"

    def __init__(self, client: D1Client) -> None:
        self._client = client

    async def close(self) -> None:
        await self._client.close()

    async def ping(self) -> None:
        await self._client.execute("SELECT 1")

    async def _first(self, statement) -> dict[str, Any] | None:  # noqa: ANN001
        rows = await self._client.run(statement)
        return rows[0] if rows else None

    # Users

    async def get_user_by_email(self, email: str) -> UserAuthRecord | None:
        row = await self._first(select(*_USER_COLUMNS).where(User.email == email).limit(1))
        return _user_from_row(row) if row else None

    async def get_user_by_id(self, user_id: int) -> UserAuthRecord | None:
        row = await self._first(select(*_USER_COLUMNS).where(User.id == user_id).limit(1))
        return _user_from_row(row) if row else None

    async def insert_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        created_at: int,
    ) -> UserAuthRecord:
        row = await self._first(
            insert(User)
            .values(
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=created_at,
            )
            .returning(*_USER_COLUMNS),
        )
        if row is None:
            raise BackendError("Failed to create user.")
        return _user_from_row(row)

    # Categories

    async def list_categories(self, user_id: int) -> list[CategoryRecord]:
        # SQLite lower() folds ASCII only, so ordering by name happens here
        rows = await self._client.run(_categories_with_counts(user_id))
        categories = [_category_from_row(row) for row in rows]
        return sorted(categories, key=lambda c: (c.name.lower(), c.id))

    async def get_category(self, user_id: int, category_id: int) -> CategoryRecord | None:
        row = await self._first(
            _categories_with_counts(user_id).where(Category.id == category_id).limit(1),
        )
        return _category_from_row(row) if row else None

    async def find_category_by_name(
        self,
        user_id: int,
        name: str,
        exclude_id: int | None = None,
    ) -> CategoryRecord | None:
        # Compared in Python for the same reason as list_categories
        wanted = name.lower()
        for category in await self.list_categories(user_id):
            if category.name.lower() == wanted and category.id != exclude_id:
                return category
        return None

    async def insert_category(self, user_id: int, name: str, created_at: int) -> CategoryRecord:
        row = await self._first(
            insert(Category)
            .values(user_id=user_id, name=name, created_at=created_at)
            .returning(Category.id, Category.user_id, Category.name),
        )
        if row is None:
            raise BackendError("Failed to create category.")
        return _category_from_row(row)

    async def rename_category(self, user_id: int, category_id: int, name: str) -> None:
        await self._client.run(
            update(Category)
            .where(Category.user_id == user_id, Category.id == category_id)
            .values(name=name),
        )

    async def delete_category(self, user_id: int, category_id: int) -> None:
        await self._client.run(
            delete(Category).where(Category.user_id == user_id, Category.id == category_id),
        )

    # Bookmarks

    async def list_bookmarks(self, user_id: int, limit: int) -> list[BookmarkRecord]:
        rows = await self._client.run(
            _bookmarks_with_category(user_id)
            .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
            .limit(limit),
        )
        return [_bookmark_from_row(row) for row in rows]

    async def get_bookmark(self, user_id: int, bookmark_id: int) -> BookmarkRecord | None:
        row = await self._first(
            _bookmarks_with_category(user_id).where(Bookmark.id == bookmark_id).limit(1),
        )
        return _bookmark_from_row(row) if row else None

    async def insert_bookmark(
        self,
        user_id: int,
        url: str,
        title: str,
        description: str,
        tags: list[str],
        category_id: int | None,
        created_at: int,
    ) -> BookmarkRecord:
        row = await self._first(
            insert(Bookmark)
            .values(
                user_id=user_id,
                url=url,
                title=title,
                description=description,
                tags=json.dumps(tags),
                category_id=category_id,
                created_at=created_at,
            )
            .returning(Bookmark.id),
        )
        if row is None:
            raise BackendError("Failed to create bookmark.")
        created = await self.get_bookmark(user_id, _to_int(row.get("id")))
        if created is None:
            raise BackendError("Failed to read back created bookmark.")
        return created

    async def update_bookmark(
        self,
        user_id: int,
        bookmark_id: int,
        url: str,
        title: str,
        description: str,
        tags: list[str],
        category_id: int | None,
    ) -> None:
        await self._client.run(
            update(Bookmark)
            .where(Bookmark.user_id == user_id, Bookmark.id == bookmark_id)
            .values(
                url=url,
                title=title,
                description=description,
                tags=json.dumps(tags),
                category_id=category_id,
            ),
        )

    async def delete_bookmark(self, user_id: int, bookmark_id: int) -> None:
        await self._client.run(
            delete(Bookmark).where(Bookmark.user_id == user_id, Bookmark.id == bookmark_id),
        )
