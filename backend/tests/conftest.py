"""Pytest fixtures for testing."""
import json
from collections.abc import AsyncGenerator, Generator
from typing import Any

import httpx
import pytest
import respx
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.exc import DBAPIError

from core.config import Settings
from db.d1_client import D1Client
from db.d1_store import D1Store
from db.memory_store import MemoryStore
from db.store import BookmarkStore
from models import Base

D1_QUERY_URL = "https://d1.test/client/v4/accounts/test-account/d1/database/test-db/query"


class FakeD1:
    """
    Answers D1 ``/query`` requests from an in-process SQLite database.

    Responses use the same envelope as the real endpoint, so D1Store runs its real
    SQL against a real SQLite engine without any network access.
    """

    def __init__(self) -> None:
        self.engine = create_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.connection = self.engine.connect()
        self.queries: list[tuple[str, list[Any]]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        sql = payload["sql"]
        params = payload.get("params") or []
        self.queries.append((sql, params))

        try:
            result = self.connection.exec_driver_sql(sql, tuple(params))
            rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
            self.connection.commit()
        except DBAPIError as e:
            self.connection.rollback()
            return httpx.Response(
                200,
                json={
                    "success": False,
                    "errors": [{"code": 7500, "message": str(e.orig)}],
                    "result": [],
                },
            )

        return httpx.Response(
            200,
            json={
                "success": True,
                "errors": [],
                "messages": [],
                "result": [{"success": True, "results": rows, "meta": {}}],
            },
        )

    def close(self) -> None:
        self.connection.close()
        self.engine.dispose()


@pytest.fixture
def settings() -> Settings:
    """Development settings isolated from the local environment and .env file."""
    return Settings(
        _env_file=None,
        CLOUDFLARE_ACCOUNT_ID="",
        CLOUDFLARE_D1_DATABASE_ID="",
        CLOUDFLARE_D1_API_TOKEN="",
        AUTH_SECRET="test-secret",
        ENVIRONMENT="development",
    )


@pytest.fixture
def fake_d1() -> Generator[FakeD1]:
    """SQLite-backed stand-in for the D1 query endpoint."""
    fake = FakeD1()
    yield fake
    fake.close()


@pytest.fixture
def mock_d1(fake_d1: FakeD1) -> Generator[respx.MockRouter]:
    """Route every D1 query request to the fake database."""
    with respx.mock(assert_all_called=False) as respx_mock:
        respx_mock.post(D1_QUERY_URL).mock(side_effect=fake_d1)
        yield respx_mock


@pytest.fixture
async def d1_store(mock_d1: respx.MockRouter) -> AsyncGenerator[D1Store]:  # noqa: ARG001
    """D1Store talking to the fake database."""
    store = D1Store(D1Client(D1_QUERY_URL, "test-token"))
    yield store
    await store.close()


@pytest.fixture
def memory_store() -> MemoryStore:
    """Empty (unseeded) in-memory store."""
    return MemoryStore()


@pytest.fixture(params=["memory", "d1"])
def store(request: pytest.FixtureRequest) -> BookmarkStore:
    """
    Run a test once against each backend.

    Both stores start empty, so the same sequence of operations must produce the
    same results and the same errors on either.
    """
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
async def client(
    store: BookmarkStore,
    settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with the store and settings overridden."""
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()
