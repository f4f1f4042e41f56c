"""Service layer for bookmark CRUD operations and search."""
import logging

from sqlalchemy import Row, Select, delete, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from db.storage import execute, query_many, query_one
from models.base import is_storable_integer, utc_now
from models.bookmark import Bookmark
from models.tag import bookmark_tags
from schemas.bookmark import BookmarkCreate, BookmarkFilter, BookmarkResponse, BookmarkUpdate
from schemas.tag import TagResponse
from services.bookmark_tag_service import (
    add_bookmark_tags,
    get_tags_for_bookmarks,
    replace_bookmark_tags,
)
from services.utils import LIKE_ESCAPE_CHAR, escape_ilike

logger = logging.getLogger(__name__)

BOOKMARK_COLUMNS = (
    Bookmark.id,
    Bookmark.title,
    Bookmark.url,
    Bookmark.description,
    Bookmark.favicon,
    Bookmark.created_at,
    Bookmark.updated_at,
)


def _row_to_bookmark(row: Row, tags: list[TagResponse]) -> BookmarkResponse:
    """Convert a bookmarks row plus its tags to the public shape."""
    return BookmarkResponse(
        id=row.id,
        title=row.title,
        url=row.url,
        description=row.description or "",
        favicon=row.favicon or "",
        tags=tags,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


async def _attach_tags(db: AsyncSession, rows: list[Row]) -> list[BookmarkResponse]:
    """Join each row with its tags, preserving row order."""
    tags_map = await get_tags_for_bookmarks(db, [row.id for row in rows])
    return [_row_to_bookmark(row, tags_map[row.id]) for row in rows]


def _build_list_query(filters: BookmarkFilter) -> Select:
    """
    Build the listing query for a filter.

    Tag filter wins over search; the two are never combined.
    """
    query = select(*BOOKMARK_COLUMNS)

    if filters.tag_id is not None:
        # (bookmark_id, tag_id) is the primary key, so the join can't duplicate
        # rows; DISTINCT keeps that true regardless
        query = (
            query.join(bookmark_tags, bookmark_tags.c.bookmark_id == Bookmark.id)
            .where(bookmark_tags.c.tag_id == filters.tag_id)
            .distinct()
        )
    elif filters.search:
        search_pattern = f"%{escape_ilike(filters.search)}%"
        query = query.where(
            or_(
                Bookmark.title.ilike(search_pattern, escape=LIKE_ESCAPE_CHAR),
                Bookmark.url.ilike(search_pattern, escape=LIKE_ESCAPE_CHAR),
                Bookmark.description.ilike(search_pattern, escape=LIKE_ESCAPE_CHAR),
            ),
        )

    # id breaks ties between bookmarks created within the same timestamp
    return query.order_by(Bookmark.created_at.desc(), Bookmark.id.desc())


async def list_bookmarks(
    db: AsyncSession,
    filters: BookmarkFilter | None = None,
) -> list[BookmarkResponse]:
    """
    List bookmarks with their tags, newest first.

    Args:
        db: Database session.
        filters:
            Optional filter. Priority:
            - tag_id: bookmarks carrying that tag (empty list for unknown tags).
            - search: case-insensitive substring of title, url, or description.
            - neither (or an empty search string): every bookmark.
    """
    filters = filters or BookmarkFilter()
    # No stored tag can have an id outside the INTEGER range
    if filters.tag_id is not None and not is_storable_integer(filters.tag_id):
        return []
    rows = await query_many(db, _build_list_query(filters))
    return await _attach_tags(db, rows)


async def get_bookmark(db: AsyncSession, bookmark_id: int) -> BookmarkResponse | None:
    """Get a single bookmark with its tags, or None if it doesn't exist."""
    row = await query_one(db, select(*BOOKMARK_COLUMNS).where(Bookmark.id == bookmark_id))
    if row is None:
        return None
    return (await _attach_tags(db, [row]))[0]


async def create_bookmark(db: AsyncSession, data: BookmarkCreate) -> BookmarkResponse:
    """
    Create a bookmark and attach its tags.

    created_at and updated_at get the same value. Must run inside a
    transaction; on UnknownTagError the inserted row is rolled back with it.

    Raises:
        UnknownTagError: If any of data.tag_ids doesn't exist.
    """
    now = utc_now()
    stmt = (
        insert(Bookmark)
        .values(
            title=data.title,
            url=data.url,
            description=data.description,
            favicon=data.favicon,
            created_at=now,
            updated_at=now,
        )
        .returning(Bookmark.id)
    )
    bookmark_id = (await query_one(db, stmt)).id

    await add_bookmark_tags(db, bookmark_id, data.tag_ids)
    logger.info("Created bookmark %d with %d tag(s)", bookmark_id, len(data.tag_ids))

    return await get_bookmark(db, bookmark_id)


async def update_bookmark(
    db: AsyncSession,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> BookmarkResponse | None:
    """
    Apply a partial update.

    Fields not supplied in `data` keep their stored value. updated_at is always
    refreshed. If tag_ids was supplied the bookmark's tags are replaced with
    exactly that set; otherwise they are left alone.

    Returns:
        The updated bookmark, or None if it doesn't exist.

    Raises:
        UnknownTagError: If any supplied tag id doesn't exist.
    """
    update_data = data.model_dump(exclude_unset=True)
    tag_ids = update_data.pop("tag_ids", None)

    stmt = (
        update(Bookmark)
        .where(Bookmark.id == bookmark_id)
        .values(**update_data, updated_at=utc_now())
        .execution_options(synchronize_session=False)
    )
    if not await execute(db, stmt):
        return None

    if tag_ids is not None:
        await replace_bookmark_tags(db, bookmark_id, tag_ids)

    logger.info("Updated bookmark %d (fields: %s)", bookmark_id, sorted(data.model_fields_set))
    return await get_bookmark(db, bookmark_id)


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> bool:
    """
    Delete a bookmark. Its bookmark_tags rows go with it via ON DELETE CASCADE.

    Returns:
        True if deleted, False if not found.
    """
    stmt = (
        delete(Bookmark)
        .where(Bookmark.id == bookmark_id)
        .execution_options(synchronize_session=False)
    )
    deleted = await execute(db, stmt)
    if deleted:
        logger.info("Deleted bookmark %d", bookmark_id)
    return deleted > 0
