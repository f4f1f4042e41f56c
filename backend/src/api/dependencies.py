"""FastAPI dependencies for injection."""
from fastapi import Request

from db.storage import Storage
from services.catalog import BookmarkCatalog


def get_storage(request: Request) -> Storage:
    """Return the Storage created by the application lifespan."""
    return request.app.state.storage


def get_catalog(request: Request) -> BookmarkCatalog:
    """Return the BookmarkCatalog created by the application lifespan."""
    return request.app.state.catalog


__all__ = [
    "get_catalog",
    "get_storage",
]
