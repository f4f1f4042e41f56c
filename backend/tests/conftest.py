"""Shared fixtures: a fresh SQLite database per test, the catalog, and an API client."""
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from api.main import create_app
from core.config import Settings
from db.storage import Storage
from schemas.tag import TagResponse
from services.catalog import BookmarkCatalog


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """File-backed database so WAL and foreign keys behave as in production."""
    return f"sqlite+aiosqlite:///{tmp_path / 'bookmarks.db'}"


@pytest.fixture
async def storage(database_url: str) -> AsyncGenerator[Storage]:
    """Storage with the schema created."""
    storage = Storage(database_url)
    await storage.create_schema()
    yield storage
    await storage.dispose()


@pytest.fixture
async def db_session(storage: Storage) -> AsyncGenerator[AsyncSession]:
    """A session inside a transaction that is committed at the end of the test."""
    async with storage.transaction() as session:
        yield session


@pytest.fixture
def catalog(storage: Storage) -> BookmarkCatalog:
    """Catalog facade over the test storage."""
    return BookmarkCatalog(storage)


@pytest.fixture
async def work_tag(catalog: BookmarkCatalog) -> TagResponse:
    """A tag named 'work'."""
    return await catalog.create_tag({"name": "work"})


@pytest.fixture
async def python_tag(catalog: BookmarkCatalog) -> TagResponse:
    """A tag named 'python' with a custom color."""
    return await catalog.create_tag({"name": "python", "color": "#3776ab"})


@pytest.fixture
async def client(
    storage: Storage,
    catalog: BookmarkCatalog,
    database_url: str,
) -> AsyncGenerator[AsyncClient]:
    """
    HTTP client for the API.

    ASGITransport doesn't run the lifespan, so the test storage and catalog
    are placed on app.state directly.
    """
    app = create_app(Settings(_env_file=None, database_url=database_url))
    app.state.storage = storage
    app.state.catalog = catalog
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as client:
        yield client
