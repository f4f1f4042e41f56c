"""
Public entry point for the bookmark catalog.

`BookmarkCatalog` composes the bookmark, tag, and association services. Each
operation runs in exactly one storage transaction, validates its inputs, and
turns "missing" results into NotFoundError subclasses, so callers (the API
layer, scripts, tests) only ever see response schemas or CatalogError.
"""
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from db.storage import Storage
from models.base import is_storable_integer
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkFilter,
    BookmarkResponse,
    BookmarkUpdate,
    DeletedResponse,
)
from schemas.tag import TagCreate, TagResponse
from services import bookmark_service, tag_service
from services.exceptions import (
    BookmarkNotFoundError,
    InvalidInputError,
    TagNotFoundError,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def coerce_id(value: Any, kind: str) -> int:
    """
    Accept an int or a string of ASCII/Unicode decimal digits as an entity id.

    The id must also fit in a SQLite INTEGER; larger values can't name a row.

    Raises:
        InvalidInputError: For anything else (bools included).
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid {kind} id: {value!r}")
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    if not isinstance(value, int):
        raise InvalidInputError(f"Invalid {kind} id: {value!r}")
    if not is_storable_integer(value):
        raise InvalidInputError(f"Invalid {kind} id: {value} is out of range")
    return value


def _format_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "input"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def parse_input(
    schema: type[SchemaT],
    data: SchemaT | Mapping[str, Any] | None,
) -> SchemaT:
    """
    Validate raw input against a request schema.

    Schema instances pass through untouched (their fields_set is preserved,
    which partial updates rely on).

    Raises:
        InvalidInputError: If validation fails.
    """
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise InvalidInputError(_format_validation_error(exc)) from exc


class BookmarkCatalog:
    """Bookmark and tag operations over a shared Storage."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def list_bookmarks(
        self,
        filters: BookmarkFilter | Mapping[str, Any] | None = None,
    ) -> list[BookmarkResponse]:
        """List bookmarks newest first; tag filter takes priority over search."""
        parsed = parse_input(BookmarkFilter, filters)
        async with self.storage.transaction() as db:
            return await bookmark_service.list_bookmarks(db, parsed)

    async def get_bookmark(self, bookmark_id: Any) -> BookmarkResponse:
        """Get one bookmark with its tags."""
        bookmark_id = coerce_id(bookmark_id, "bookmark")
        async with self.storage.transaction() as db:
            bookmark = await bookmark_service.get_bookmark(db, bookmark_id)
        if bookmark is None:
            raise BookmarkNotFoundError(bookmark_id)
        return bookmark

    async def create_bookmark(
        self,
        data: BookmarkCreate | Mapping[str, Any],
    ) -> BookmarkResponse:
        """Create a bookmark and its tag associations atomically."""
        parsed = parse_input(BookmarkCreate, data)
        async with self.storage.transaction() as db:
            return await bookmark_service.create_bookmark(db, parsed)

    async def update_bookmark(
        self,
        bookmark_id: Any,
        data: BookmarkUpdate | Mapping[str, Any],
    ) -> BookmarkResponse:
        """Partially update a bookmark; supplied tag_ids replace its tag set."""
        bookmark_id = coerce_id(bookmark_id, "bookmark")
        parsed = parse_input(BookmarkUpdate, data)
        async with self.storage.transaction() as db:
            bookmark = await bookmark_service.update_bookmark(db, bookmark_id, parsed)
        if bookmark is None:
            raise BookmarkNotFoundError(bookmark_id)
        return bookmark

    async def delete_bookmark(self, bookmark_id: Any) -> DeletedResponse:
        """Delete a bookmark and its tag associations."""
        bookmark_id = coerce_id(bookmark_id, "bookmark")
        async with self.storage.transaction() as db:
            deleted = await bookmark_service.delete_bookmark(db, bookmark_id)
        if not deleted:
            raise BookmarkNotFoundError(bookmark_id)
        return DeletedResponse(id=bookmark_id)

    async def list_tags(self) -> list[TagResponse]:
        """List all tags sorted by name."""
        async with self.storage.transaction() as db:
            return await tag_service.list_tags(db)

    async def create_tag(self, data: TagCreate | Mapping[str, Any]) -> TagResponse:
        """Create a tag; duplicate names raise TagAlreadyExistsError."""
        parsed = parse_input(TagCreate, data)
        async with self.storage.transaction() as db:
            return await tag_service.create_tag(db, parsed)

    async def delete_tag(self, tag_id: Any) -> DeletedResponse:
        """Delete a tag; it is removed from every bookmark carrying it."""
        tag_id = coerce_id(tag_id, "tag")
        async with self.storage.transaction() as db:
            deleted = await tag_service.delete_tag(db, tag_id)
        if not deleted:
            raise TagNotFoundError(tag_id)
        return DeletedResponse(id=tag_id)
