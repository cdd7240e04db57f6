"""Category management endpoints."""
from fastapi import APIRouter, Depends

from api.dependencies import get_current_user_id, get_store
from db.store import BookmarkStore
from schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryRename,
    CategoryResponse,
)
from services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=CategoryListResponse)
async def list_categories(
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> CategoryListResponse:
    """Get the current user's categories sorted by name, with bookmark counts."""
    categories = await category_service.list_categories(store, user_id)
    return CategoryListResponse(
        items=[CategoryResponse.model_validate(c) for c in categories],
    )


@router.post("/", response_model=CategoryResponse, status_code=201)
async def create_category(
    data: CategoryCreate,
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> CategoryResponse:
    """
    Create a category.

    Returns 400 if the name is blank, 409 if the user already has a category with
    the same name ignoring case.
    """
    category = await category_service.create_category(store, user_id, data.name)
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def rename_category(
    category_id: int,
    data: CategoryRename,
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> CategoryResponse:
    """Rename a category. Returns 404 if it doesn't exist, 409 on a name clash."""
    category = await category_service.rename_category(store, user_id, category_id, data.name)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=204)
async def delete_category(
    category_id: int,
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> None:
    """
    Delete a category.

    Returns 409 while any bookmark is still assigned to it; move or delete those
    bookmarks first.
    """
    await category_service.delete_category(store, user_id, category_id)
