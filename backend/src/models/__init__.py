"""SQLAlchemy models."""
from models.base import Base, TimestampMixin
from models.bookmark import Bookmark
from models.tag import DEFAULT_TAG_COLOR, Tag, bookmark_tags

__all__ = ["DEFAULT_TAG_COLOR", "Base", "Bookmark", "Tag", "TimestampMixin", "bookmark_tags"]
