"""Bookmark model for storing catalog entries."""
from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin


class Bookmark(Base, TimestampMixin):
    """
    Bookmark model - stores a URL with its metadata.

    Tags are linked through the bookmark_tags table (see models.tag); rows
    there are removed by the database-level cascade when a bookmark is deleted.
    """

    __tablename__ = "bookmarks"
    # AUTOINCREMENT keeps ids of deleted rows from being reused
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", server_default="")
    favicon: Mapped[str] = mapped_column(Text, default="", server_default="")
