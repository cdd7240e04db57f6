"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_current_user_id, get_store
from db.store import BookmarkStore
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkUpdate,
)
from services import bookmark_service

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=BookmarkListResponse)
async def list_bookmarks(
    limit: int = Query(
        default=bookmark_service.MAX_LIST_LIMIT,
        ge=1,
        le=bookmark_service.MAX_LIST_LIMIT,
        description="Maximum number of bookmarks to return",
    ),
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> BookmarkListResponse:
    """List the current user's bookmarks, newest first, with category names resolved."""
    bookmarks = await bookmark_service.list_bookmarks(store, user_id, limit)
    return BookmarkListResponse(
        items=[BookmarkResponse.model_validate(b) for b in bookmarks],
    )


@router.post("/", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> BookmarkResponse:
    """Create a new bookmark."""
    bookmark = await bookmark_service.create_bookmark(store, user_id, data)
    return BookmarkResponse.model_validate(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: int,
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    bookmark = await bookmark_service.get_bookmark(store, user_id, bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: int,
    data: BookmarkUpdate,
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> BookmarkResponse:
    """Update a bookmark. At least one field must be provided."""
    if not data.model_fields_set:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one field must be provided",
        )
    bookmark = await bookmark_service.update_bookmark(store, user_id, bookmark_id, data)
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: int,
    user_id: int = Depends(get_current_user_id),
    store: BookmarkStore = Depends(get_store),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(store, user_id, bookmark_id)
