"""Pydantic schemas for category endpoints."""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import validate_category_name_length


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def check_name_length(cls, v: str) -> str:
        """Validate name length."""
        return validate_category_name_length(v)


class CategoryRename(BaseModel):
    """Schema for renaming a category."""

    name: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def check_name_length(cls, v: str) -> str:
        """Validate name length."""
        return validate_category_name_length(v)


class CategoryResponse(BaseModel):
    """Schema for a category with its computed bookmark count."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    bookmark_count: int


class CategoryListResponse(BaseModel):
    """Schema for the categories list response."""

    items: list[CategoryResponse]
