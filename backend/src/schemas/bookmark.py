"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from models.base import SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN
from schemas.tag import TagResponse

# Ids larger than a SQLite INTEGER can never refer to a stored row
TagId = Annotated[int, Field(ge=SQLITE_INTEGER_MIN, le=SQLITE_INTEGER_MAX)]


def dedupe_tag_ids(tag_ids: list[int]) -> list[int]:
    """Drop repeated tag ids, keeping first-seen order."""
    return list(dict.fromkeys(tag_ids))


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    # No URL format validation; any non-empty string is accepted
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    description: str = ""
    favicon: str = ""
    tag_ids: list[TagId] = []

    @field_validator("description", "favicon", mode="before")
    @classmethod
    def null_to_empty(cls, v: str | None) -> str:
        """Optional text fields default to empty when sent as null."""
        return "" if v is None else v

    @field_validator("tag_ids", mode="before")
    @classmethod
    def null_to_no_tags(cls, v: list[int] | None) -> list[int]:
        """A null tag list means no tags."""
        return [] if v is None else v

    @field_validator("tag_ids")
    @classmethod
    def unique_tag_ids(cls, v: list[int]) -> list[int]:
        """Collapse duplicate tag ids."""
        return dedupe_tag_ids(v)


class BookmarkUpdate(BaseModel):
    """
    Schema for a partial bookmark update.

    Only fields that were actually supplied are applied; check
    `model_fields_set` (or dump with `exclude_unset=True`) rather than comparing
    against None. A supplied empty description or favicon clears the field,
    while a supplied `tag_ids` (even `[]`) replaces the bookmark's whole tag set.
    """

    title: str | None = Field(default=None, min_length=1)
    url: str | None = Field(default=None, min_length=1)
    description: str | None = None
    favicon: str | None = None
    tag_ids: list[TagId] | None = None

    @field_validator("title", "url", "description", "favicon", "tag_ids")
    @classmethod
    def reject_explicit_null(cls, v: object) -> object:
        """Fields may be omitted but not set to null."""
        # Validators only run for supplied values, so None here was sent explicitly
        if v is None:
            raise ValueError("Field may be omitted but not set to null")
        return v

    @field_validator("tag_ids")
    @classmethod
    def unique_tag_ids(cls, v: list[int]) -> list[int]:
        """Collapse duplicate tag ids."""
        return dedupe_tag_ids(v)


class BookmarkFilter(BaseModel):
    """
    Filter for listing bookmarks.

    The filters are not combined: a tag filter takes priority, then a
    non-empty search string, otherwise everything is listed.
    """

    search: str | None = None
    tag_id: int | None = None


class BookmarkResponse(BaseModel):
    """Schema for a bookmark joined with its tags."""

    id: int
    title: str
    url: str
    description: str
    favicon: str
    tags: list[TagResponse]
    created_at: datetime
    updated_at: datetime


class DeletedResponse(BaseModel):
    """Schema returned by delete operations."""

    id: int
