"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import auth, bookmarks, categories, health
from core.config import get_settings
from db.d1_client import BackendError
from db.session import create_store
from services.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    # Startup: pick the persistence backend once for the whole process
    store = create_store(get_settings())
    app.state.store = store

    yield

    # Shutdown: release the backend's HTTP client, if any
    await store.close()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

app = FastAPI(
    title="Linkshelf API",
    description="A personal bookmark manager with categories and tags.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ValidationError)
async def validation_exception_handler(
    _request: Request, exc: ValidationError,
) -> JSONResponse:
    """Report invalid input along with the offending field."""
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message, "field": exc.field},
    )


@app.exception_handler(UnauthorizedError)
async def unauthorized_exception_handler(
    _request: Request, _exc: UnauthorizedError,
) -> JSONResponse:
    """Reject unauthenticated requests without saying why."""
    return JSONResponse(status_code=401, content={"detail": "Unauthorized"})


@app.exception_handler(NotFoundError)
async def not_found_exception_handler(
    _request: Request, exc: NotFoundError,
) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ConflictError)
async def conflict_exception_handler(
    _request: Request, exc: ConflictError,
) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(BackendError)
async def backend_exception_handler(
    request: Request, exc: BackendError,
) -> JSONResponse:
    """Hide backend failure details from clients; they are logged instead."""
    logger.error(
        "Backend failure on %s %s: %s", request.method, request.url.path, exc,
    )
    return JSONResponse(
        status_code=502,
        content={"detail": "Storage backend is unavailable. Please try again later."},
    )


# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(bookmarks.router)
app.include_router(categories.router)
