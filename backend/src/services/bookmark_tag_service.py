"""
Maintains the bookmark_tags association set.

Association rows have no lifecycle of their own: they are written only while
creating or updating a bookmark, and removed by the ON DELETE CASCADE foreign
keys when either parent row goes away. The (bookmark_id, tag_id) primary key
keeps them a set, and inserts use ON CONFLICT DO NOTHING so re-adding a pair
is a no-op.
"""
import logging

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db.storage import execute, query_many
from models.tag import Tag, bookmark_tags
from schemas.tag import TagResponse
from services.exceptions import UnknownTagError
from services.tag_service import TAG_COLUMNS, row_to_tag

logger = logging.getLogger(__name__)


async def find_missing_tag_ids(db: AsyncSession, tag_ids: list[int]) -> list[int]:
    """Return the ids in `tag_ids` that have no matching tag, in input order."""
    if not tag_ids:
        return []
    rows = await query_many(db, select(Tag.id).where(Tag.id.in_(tag_ids)))
    existing = {row.id for row in rows}
    return [tag_id for tag_id in tag_ids if tag_id not in existing]


async def add_bookmark_tags(
    db: AsyncSession,
    bookmark_id: int,
    tag_ids: list[int],
) -> None:
    """
    Attach tags to a bookmark, ignoring pairs that already exist.

    Raises:
        UnknownTagError: If any tag id doesn't exist. Nothing is inserted.
    """
    if not tag_ids:
        return

    missing = await find_missing_tag_ids(db, tag_ids)
    if missing:
        logger.warning("Bookmark %d references unknown tags %s", bookmark_id, missing)
        raise UnknownTagError(missing)

    stmt = (
        sqlite_insert(bookmark_tags)
        .values([{"bookmark_id": bookmark_id, "tag_id": tag_id} for tag_id in tag_ids])
        .on_conflict_do_nothing()
    )
    try:
        await execute(db, stmt)
    except IntegrityError as exc:
        # A tag was deleted between the lookup and the insert; the FK caught it
        raise UnknownTagError(tag_ids) from exc


async def replace_bookmark_tags(
    db: AsyncSession,
    bookmark_id: int,
    tag_ids: list[int],
) -> None:
    """
    Replace a bookmark's whole tag set. An empty list removes every tag.

    Must run inside the caller's transaction so the delete and the inserts
    commit or roll back together.
    """
    await execute(db, delete(bookmark_tags).where(bookmark_tags.c.bookmark_id == bookmark_id))
    await add_bookmark_tags(db, bookmark_id, tag_ids)


async def get_tags_for_bookmarks(
    db: AsyncSession,
    bookmark_ids: list[int],
) -> dict[int, list[TagResponse]]:
    """
    Fetch tags for a list of bookmarks in one query.

    Returns a dict mapping bookmark id -> tags sorted by name. Every requested
    id is present, with an empty list when it has no tags.
    """
    result: dict[int, list[TagResponse]] = {bookmark_id: [] for bookmark_id in bookmark_ids}
    if not bookmark_ids:
        return result

    query = (
        select(bookmark_tags.c.bookmark_id, *TAG_COLUMNS)
        .join(Tag, bookmark_tags.c.tag_id == Tag.id)
        .where(bookmark_tags.c.bookmark_id.in_(bookmark_ids))
        .order_by(Tag.name.asc(), Tag.id.asc())
    )
    for row in await query_many(db, query):
        result[row.bookmark_id].append(row_to_tag(row))
    return result
