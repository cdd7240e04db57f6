"""
Storage contract shared by the D1 and in-memory backends.

Services enforce every domain rule (uniqueness, ownership, containment) on top of
this interface, so both implementations only need to read and write rows
faithfully. Every method that takes a user_id is scoped to that user's rows.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

UNCATEGORIZED = "Uncategorized"


@dataclass
class UserRecord:
    """Public projection of a user. Never carries the credential."""

    id: int
    username: str
    email: str
    created_at: int


@dataclass
class UserAuthRecord(UserRecord):
    """User row including the password credential, for credential checks only."""

    password_hash: str = ""

    def to_public(self) -> UserRecord:
        return UserRecord(
            id=self.id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
        )


@dataclass
class CategoryRecord:
    """Category with its computed bookmark count."""

    id: int
    user_id: int
    name: str
    bookmark_count: int = 0


@dataclass
class BookmarkRecord:
    """Bookmark with its category name resolved (or "Uncategorized")."""

    id: int
    user_id: int
    title: str
    url: str
    description: str
    category_id: int | None
    category: str
    created_at: int
    tags: list[str] = field(default_factory=list)


class BookmarkStore(ABC):
    """Per-operation persistence contract used by the service layer."""

    name: str

    async def close(self) -> None:  # noqa: B027
        """Release backend resources. No-op unless the backend holds any."""

    async def ping(self) -> None:  # noqa: B027
        """Check the backend is reachable. Raises BackendError if not."""

    # Users

    @abstractmethod
    async def get_user_by_email(self, email: str) -> UserAuthRecord | None:
        """Find a user by an already-normalized email."""

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> UserAuthRecord | None:
        """Find a user by id."""

    @abstractmethod
    async def insert_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        created_at: int,
    ) -> UserAuthRecord:
        """Insert a user row and return it with its assigned id."""

    # Categories

    @abstractmethod
    async def list_categories(self, user_id: int) -> list[CategoryRecord]:
        """List the user's categories ordered by lower(name), then id."""

    @abstractmethod
    async def get_category(self, user_id: int, category_id: int) -> CategoryRecord | None:
        """Get one of the user's categories with its bookmark count."""

    @abstractmethod
    async def find_category_by_name(
        self,
        user_id: int,
        name: str,
        exclude_id: int | None = None,
    ) -> CategoryRecord | None:
        """Find the user's category whose name matches ignoring case."""

    @abstractmethod
    async def insert_category(self, user_id: int, name: str, created_at: int) -> CategoryRecord:
        """Insert a category row and return it with its assigned id."""

    @abstractmethod
    async def rename_category(self, user_id: int, category_id: int, name: str) -> None:
        """Set the name of one of the user's categories."""

    @abstractmethod
    async def delete_category(self, user_id: int, category_id: int) -> None:
        """Delete one of the user's categories."""

    # Bookmarks

    @abstractmethod
    async def list_bookmarks(self, user_id: int, limit: int) -> list[BookmarkRecord]:
        """List the user's bookmarks newest first (ties broken by id, descending)."""

    @abstractmethod
    async def get_bookmark(self, user_id: int, bookmark_id: int) -> BookmarkRecord | None:
        """Get one of the user's bookmarks."""

    @abstractmethod
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
        """Insert a bookmark row and return it with its category resolved."""

    @abstractmethod
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
        """Overwrite the mutable fields of one of the user's bookmarks."""

    @abstractmethod
    async def delete_bookmark(self, user_id: int, bookmark_id: int) -> None:
        """Delete one of the user's bookmarks."""
