"""Shared exceptions for service layer operations."""


class ValidationError(Exception):
    """
    Raised when input is malformed or missing.

    Carries the offending field so the API layer can report it alongside the message.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


class EmptyNameError(ValidationError):
    """Raised when a category name is blank after trimming."""

    def __init__(self) -> None:
        super().__init__("name", "Category name is required.")


class InvalidCategoryIdError(ValidationError):
    """Raised when a category id is not a positive integer."""

    def __init__(self, category_id: object) -> None:
        self.category_id = category_id
        super().__init__("category_id", "Invalid category id.")


class InvalidLimitError(ValidationError):
    """Raised when a list limit is below 1."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__("limit", f"Limit must be at least 1 (got {limit}).")


class NotFoundError(Exception):
    """Raised when an id or email has no matching row for the user."""

    def __init__(self, entity: str, message: str | None = None) -> None:
        self.entity = entity
        super().__init__(message or f"{entity} not found.")


class BookmarkNotFoundError(NotFoundError):
    """Raised when a bookmark doesn't exist or doesn't belong to the user."""

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark")


class CategoryNotFoundError(NotFoundError):
    """Raised when a category doesn't exist or doesn't belong to the user."""

    def __init__(self, category_id: int) -> None:
        self.category_id = category_id
        super().__init__("Category")


class ConflictError(Exception):
    """Raised when a write would break a uniqueness or containment rule."""


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already registered.")


class DuplicateCategoryNameError(ConflictError):
    """Raised when a user already has a category with the same name (case-insensitive)."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("Category name already exists.")


class CategoryNotEmptyError(ConflictError):
    """Raised when deleting a category that still has bookmarks."""

    def __init__(self, category_id: int, bookmark_count: int) -> None:
        self.category_id = category_id
        self.bookmark_count = bookmark_count
        super().__init__("Category contains bookmarks and cannot be deleted.")


class UnauthorizedError(Exception):
    """Raised when a request has no valid session. Deliberately carries no reason."""

    def __init__(self) -> None:
        super().__init__("Unauthorized")
