"""
In-process BookmarkStore used when D1 is not configured.

This is a complete second implementation of the store contract, not a cache.
State is plain Python lists shared by every request in the process. There is no
locking: each method runs without awaiting, but a service operation that makes
several store calls can interleave with another request's. That is acceptable
for local development and tests only.
"""
import time
from dataclasses import dataclass, field, replace

from core.passwords import hash_password
from db.store import (
    UNCATEGORIZED,
    BookmarkRecord,
    BookmarkStore,
    CategoryRecord,
    UserAuthRecord,
)

DEMO_EMAIL = "demo@example.local"
DEMO_PASSWORD = "Demo@123456"


@dataclass
class _UserRow:
    id: int
    username: str
    email: str
    password_hash: str
    created_at: int


@dataclass
class _CategoryRow:
    id: int
    user_id: int
    name: str
    created_at: int


@dataclass
class _BookmarkRow:
    id: int
    user_id: int
    title: str
    url: str
    description: str
    category_id: int | None
    created_at: int
    tags: list[str] = field(default_factory=list)


class MemoryStore(BookmarkStore):
    """
    BookmarkStore over in-memory lists.

    Ids come from per-table counters that only move forward, so a deleted row's id
    is never handed out again (same as an AUTOINCREMENT table).
    """

    name = "memory"

    def __init__(self, seed: bool = False, now: int | None = None) -> None:
        self.users: list[_UserRow] = []
        self.categories: list[_CategoryRow] = []
        self.bookmarks: list[_BookmarkRow] = []
        self._last_ids = {"users": 0, "categories": 0, "bookmarks": 0}
        if seed:
            self._seed(int(time.time()) if now is None else now)

    def _next_id(self, table: str) -> int:
        self._last_ids[table] += 1
        return self._last_ids[table]

    def _seed(self, now: int) -> None:
        """Load the demo account with two categories and three bookmarks."""
        demo = _UserRow(
            id=self._next_id("users"),
            username="demo",
            email=DEMO_EMAIL,
            password_hash=hash_password(DEMO_PASSWORD),
            created_at=now,
        )
        self.users.append(demo)

        design = _CategoryRow(self._next_id("categories"), demo.id, "Design Resources", now)
        development = _CategoryRow(self._next_id("categories"), demo.id, "Development", now)
        self.categories.extend([design, development])

        fixtures = [
            (
                "Figma",
                "https://figma.com/files/project-alpha",
                "Collaborative interface design tool.",
                ["design", "ui"],
                design.id,
                now - 120,
            ),
            (
                "Dribbble Inspiration",
                "https://dribbble.com/shots/popular",
                "Discover inspiration from top designers.",
                ["inspiration"],
                design.id,
                now - 3600,
            ),
            (
                "UX Collective",
                "https://medium.com/ux-collective",
                "Curated UX stories and product design articles.",
                ["reading"],
                None,
                now - 7200,
            ),
        ]
        for title, url, description, tags, category_id, created_at in fixtures:
            self.bookmarks.append(
                _BookmarkRow(
                    id=self._next_id("bookmarks"),
                    user_id=demo.id,
                    title=title,
                    url=url,
                    description=description,
                    category_id=category_id,
                    created_at=created_at,
                    tags=tags,
                ),
            )

    # Helpers

    def _count_bookmarks(self, user_id: int, category_id: int) -> int:
        return sum(
            1 for row in self.bookmarks
            if row.user_id == user_id and row.category_id == category_id
        )

    def _category_record(self, row: _CategoryRow) -> CategoryRecord:
        return CategoryRecord(
            id=row.id,
            user_id=row.user_id,
            name=row.name,
            bookmark_count=self._count_bookmarks(row.user_id, row.id),
        )

    def _category_name(self, user_id: int, category_id: int | None) -> str:
        if category_id is None:
            return UNCATEGORIZED
        for row in self.categories:
            if row.id == category_id and row.user_id == user_id:
                return row.name
        return UNCATEGORIZED

    def _bookmark_record(self, row: _BookmarkRow) -> BookmarkRecord:
        return BookmarkRecord(
            id=row.id,
            user_id=row.user_id,
            title=row.title,
            url=row.url,
            description=row.description,
            category_id=row.category_id,
            category=self._category_name(row.user_id, row.category_id),
            created_at=row.created_at,
            tags=list(row.tags),
        )

    @staticmethod
    def _user_record(row: _UserRow) -> UserAuthRecord:
        return UserAuthRecord(
            id=row.id,
            username=row.username,
            email=row.email,
            created_at=row.created_at,
            password_hash=row.password_hash,
        )

    def _find_category(self, user_id: int, category_id: int) -> _CategoryRow | None:
        for row in self.categories:
            if row.id == category_id and row.user_id == user_id:
                return row
        return None

    def _find_bookmark(self, user_id: int, bookmark_id: int) -> _BookmarkRow | None:
        for row in self.bookmarks:
            if row.id == bookmark_id and row.user_id == user_id:
                return row
        return None

    # Users

    async def get_user_by_email(self, email: str) -> UserAuthRecord | None:
        for row in self.users:
            if row.email == email:
                return self._user_record(row)
        return None

    async def get_user_by_id(self, user_id: int) -> UserAuthRecord | None:
        for row in self.users:
            if row.id == user_id:
                return self._user_record(row)
        return None

    async def insert_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        created_at: int,
    ) -> UserAuthRecord:
        row = _UserRow(self._next_id("users"), username, email, password_hash, created_at)
        self.users.append(row)
        return self._user_record(row)

    # Categories

    async def list_categories(self, user_id: int) -> list[CategoryRecord]:
        rows = sorted(
            (row for row in self.categories if row.user_id == user_id),
            key=lambda row: (row.name.lower(), row.id),
        )
        return [self._category_record(row) for row in rows]

    async def get_category(self, user_id: int, category_id: int) -> CategoryRecord | None:
        row = self._find_category(user_id, category_id)
        return self._category_record(row) if row else None

    async def find_category_by_name(
        self,
        user_id: int,
        name: str,
        exclude_id: int | None = None,
    ) -> CategoryRecord | None:
        wanted = name.lower()
        matches = [
            row for row in self.categories
            if row.user_id == user_id and row.name.lower() == wanted and row.id != exclude_id
        ]
        if not matches:
            return None
        return self._category_record(min(matches, key=lambda row: row.id))

    async def insert_category(self, user_id: int, name: str, created_at: int) -> CategoryRecord:
        row = _CategoryRow(self._next_id("categories"), user_id, name, created_at)
        self.categories.append(row)
        return self._category_record(row)

    async def rename_category(self, user_id: int, category_id: int, name: str) -> None:
        row = self._find_category(user_id, category_id)
        if row is not None:
            row.name = name

    async def delete_category(self, user_id: int, category_id: int) -> None:
        self.categories = [
            row for row in self.categories
            if not (row.id == category_id and row.user_id == user_id)
        ]

    # Bookmarks

    async def list_bookmarks(self, user_id: int, limit: int) -> list[BookmarkRecord]:
        rows = sorted(
            (row for row in self.bookmarks if row.user_id == user_id),
            key=lambda row: (row.created_at, row.id),
            reverse=True,
        )
        return [self._bookmark_record(row) for row in rows[:limit]]

    async def get_bookmark(self, user_id: int, bookmark_id: int) -> BookmarkRecord | None:
        row = self._find_bookmark(user_id, bookmark_id)
        return self._bookmark_record(row) if row else None

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
        row = _BookmarkRow(
            id=self._next_id("bookmarks"),
            user_id=user_id,
            title=title,
            url=url,
            description=description,
            category_id=category_id,
            created_at=created_at,
            tags=list(tags),
        )
        self.bookmarks.append(row)
        return self._bookmark_record(row)

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
        for index, row in enumerate(self.bookmarks):
            if row.id == bookmark_id and row.user_id == user_id:
                self.bookmarks[index] = replace(
                    row,
                    url=url,
                    title=title,
                    description=description,
                    tags=list(tags),
                    category_id=category_id,
                )
                return

    async def delete_bookmark(self, user_id: int, bookmark_id: int) -> None:
        self.bookmarks = [
            row for row in self.bookmarks
            if not (row.id == bookmark_id and row.user_id == user_id)
        ]
