"""Service layer for tag CRUD operations."""
import logging

from sqlalchemy import Row, delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db.storage import execute, query_many, query_one
from models.tag import Tag
from schemas.tag import TagCreate, TagResponse
from services.exceptions import TagAlreadyExistsError

logger = logging.getLogger(__name__)

TAG_COLUMNS = (Tag.id, Tag.name, Tag.color)


def row_to_tag(row: Row) -> TagResponse:
    """Convert a tags row to its public shape."""
    return TagResponse(id=row.id, name=row.name, color=row.color)


async def list_tags(db: AsyncSession) -> list[TagResponse]:
    """Return all tags sorted by name."""
    rows = await query_many(db, select(*TAG_COLUMNS).order_by(Tag.name.asc()))
    return [row_to_tag(row) for row in rows]


async def get_tag(db: AsyncSession, tag_id: int) -> TagResponse | None:
    """Return a tag by id, or None if it doesn't exist."""
    row = await query_one(db, select(*TAG_COLUMNS).where(Tag.id == tag_id))
    return row_to_tag(row) if row is not None else None


async def create_tag(db: AsyncSession, data: TagCreate) -> TagResponse:
    """
    Create a tag.

    Name uniqueness is enforced by the table's UNIQUE constraint rather than a
    lookup beforehand, so two concurrent creates cannot both succeed.

    Raises:
        TagAlreadyExistsError: If a tag with the same name exists.
    """
    stmt = (
        insert(Tag)
        .values(name=data.name, color=data.color)
        .returning(*TAG_COLUMNS)
    )
    try:
        row = await query_one(db, stmt)
    except IntegrityError as exc:
        logger.warning("Tag name conflict: %r", data.name)
        raise TagAlreadyExistsError(data.name) from exc
    tag = row_to_tag(row)
    logger.info("Created tag %d (%s)", tag.id, tag.name)
    return tag


async def delete_tag(db: AsyncSession, tag_id: int) -> bool:
    """
    Delete a tag. Its bookmark_tags rows go with it via ON DELETE CASCADE.

    Returns:
        True if a tag was deleted, False if it didn't exist.
    """
    stmt = delete(Tag).where(Tag.id == tag_id).execution_options(synchronize_session=False)
    deleted = await execute(db, stmt)
    if deleted:
        logger.info("Deleted tag %d", tag_id)
    return deleted > 0
