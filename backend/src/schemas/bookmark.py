"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict, field_validator

from schemas.validators import (
    validate_category_name_length,
    validate_description_length,
    validate_tags,
    validate_title_length,
    validate_url,
)


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    Category assignment has two modes. Sending ``category_id`` (an id, or null for
    uncategorized) always wins. Otherwise a ``category`` name is looked up for the
    user and created if missing.
    """

    url: str
    title: str | None = None
    description: str | None = None
    category_id: int | None = None
    category: str | None = None
    tags: list[str] = []

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        """Validate URL shape."""
        return validate_url(v)

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str | None) -> str | None:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)

    @field_validator("category")
    @classmethod
    def check_category_length(cls, v: str | None) -> str | None:
        """Validate category name length."""
        return validate_category_name_length(v)

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, v: list[str] | None) -> list[str]:
        """Trim and validate tags."""
        if v is None:
            return []
        return validate_tags(v)


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating a bookmark.

    Omitted fields keep their current value. ``category_id: null`` clears the
    category; null for any other field is treated as omitted.
    """

    url: str | None = None
    title: str | None = None
    description: str | None = None
    category_id: int | None = None
    tags: list[str] | None = None

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str | None) -> str | None:
        """Validate URL shape if provided."""
        if v is None:
            return None
        return validate_url(v)

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str | None) -> str | None:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, v: list[str] | None) -> list[str] | None:
        """Trim and validate tags if provided."""
        if v is None:
            return None
        return validate_tags(v)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses, with the category name resolved."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    title: str
    description: str
    category_id: int | None
    category: str
    tags: list[str]
    created_at: int


class BookmarkListResponse(BaseModel):
    """Schema for bookmark list responses (newest first)."""

    items: list[BookmarkResponse]
