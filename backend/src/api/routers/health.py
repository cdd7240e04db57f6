"""Health check endpoints."""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_store
from db.d1_client import BackendError
from db.store import BookmarkStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    backend: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: BookmarkStore = Depends(get_store),
) -> HealthResponse:
    """Check application and backend health."""
    db_status = "healthy"
    try:
        await store.ping()
    except BackendError:
        logger.exception("Database health check failed")
        db_status = "unhealthy"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        backend=store.name,
        database=db_status,
    )
