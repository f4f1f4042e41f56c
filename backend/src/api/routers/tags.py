"""Tag management endpoints."""
from fastapi import APIRouter, Depends

from api.dependencies import get_catalog
from schemas.bookmark import DeletedResponse
from schemas.tag import TagCreate, TagResponse
from services.catalog import BookmarkCatalog

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=list[TagResponse])
async def list_tags(
    catalog: BookmarkCatalog = Depends(get_catalog),
) -> list[TagResponse]:
    """Get all tags sorted alphabetically."""
    return await catalog.list_tags()


@router.post("/", response_model=TagResponse, status_code=201)
async def create_tag(
    data: TagCreate,
    catalog: BookmarkCatalog = Depends(get_catalog),
) -> TagResponse:
    """
    Create a tag.

    Returns 409 if a tag with the same name already exists.
    """
    return await catalog.create_tag(data)


@router.delete("/{tag_id}", response_model=DeletedResponse)
async def delete_tag(
    tag_id: int,
    catalog: BookmarkCatalog = Depends(get_catalog),
) -> DeletedResponse:
    """
    Delete a tag.

    The tag is removed from every bookmark that carried it; the bookmarks stay.
    """
    return await catalog.delete_tag(tag_id)
