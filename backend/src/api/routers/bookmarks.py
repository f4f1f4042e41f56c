"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Depends, Query

from api.dependencies import get_catalog
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkFilter,
    BookmarkResponse,
    BookmarkUpdate,
    DeletedResponse,
)
from services.catalog import BookmarkCatalog

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=list[BookmarkResponse])
async def list_bookmarks(
    search: str | None = Query(
        default=None, description="Case-insensitive match on title, url, description",
    ),
    tag_id: int | None = Query(
        default=None, description="Only bookmarks with this tag (takes priority over search)",
    ),
    catalog: BookmarkCatalog = Depends(get_catalog),
) -> list[BookmarkResponse]:
    """List bookmarks, newest first."""
    return await catalog.list_bookmarks(BookmarkFilter(search=search, tag_id=tag_id))


@router.post("/", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    catalog: BookmarkCatalog = Depends(get_catalog),
) -> BookmarkResponse:
    """Create a new bookmark."""
    return await catalog.create_bookmark(data)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: int,
    catalog: BookmarkCatalog = Depends(get_catalog),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return await catalog.get_bookmark(bookmark_id)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: int,
    data: BookmarkUpdate,
    catalog: BookmarkCatalog = Depends(get_catalog),
) -> BookmarkResponse:
    """
    Update a bookmark.

    Omitted fields are left unchanged. Supplying `tag_ids` replaces the
    bookmark's tags; `[]` removes them all.
    """
    return await catalog.update_bookmark(bookmark_id, data)


@router.delete("/{bookmark_id}", response_model=DeletedResponse)
async def delete_bookmark(
    bookmark_id: int,
    catalog: BookmarkCatalog = Depends(get_catalog),
) -> DeletedResponse:
    """Delete a bookmark."""
    return await catalog.delete_bookmark(bookmark_id)
