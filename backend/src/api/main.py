"""FastAPI application entry point."""
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import bookmarks, health, tags
from core.config import Settings, get_settings
from db.storage import Storage
from services.catalog import BookmarkCatalog
from services.exceptions import (
    CatalogError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
    StorageUnavailableError,
)


logger = logging.getLogger(__name__)

# Most specific first; the handler walks this list in order
ERROR_STATUS_CODES: list[tuple[type[CatalogError], int]] = [
    (InvalidInputError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (StorageUnavailableError, 503),
]


def status_code_for(exc: CatalogError) -> int:
    """Map a catalog error to its HTTP status code (500 if unmapped)."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Render catalog errors as `{"detail": message}` with a mapped status."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; storage is opened in the lifespan."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        storage = Storage(settings.database_url, echo=settings.database_echo)
        await storage.create_schema()
        app.state.storage = storage
        app.state.catalog = BookmarkCatalog(storage)
        try:
            yield
        finally:
            await storage.dispose()

    app = FastAPI(
        title="Bookmarks API",
        description="A bookmark management system with tagging and search capabilities.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CatalogError, catalog_error_handler)

    app.include_router(health.router)
    app.include_router(bookmarks.router)
    app.include_router(tags.router)
    return app


app = create_app()
