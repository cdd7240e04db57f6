"""Backend selection: one BookmarkStore per process."""
import logging

from fastapi import Request

from core.config import Settings
from db.d1_client import D1Client
from db.d1_store import D1Store
from db.memory_store import MemoryStore
from db.store import BookmarkStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> BookmarkStore:
    """
    Pick the persistence backend from configuration.

    D1 is used when its three credentials are present; otherwise a seeded
    in-memory store stands in with the same rules.
    """
    if settings.d1_configured:
        logger.info("Using Cloudflare D1 backend")
        return D1Store(D1Client.from_settings(settings))

    logger.info("Cloudflare D1 not configured, using in-memory backend with demo data")
    return MemoryStore(seed=True)


def get_store(request: Request) -> BookmarkStore:
    """FastAPI dependency returning the store created at application startup."""
    return request.app.state.store
