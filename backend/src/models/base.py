"""Declarative base and shared column mixins."""
from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """
    Current UTC time without tzinfo.

    SQLite has no timezone-aware column type, so timestamps are stored and
    read back as naive UTC values.
    """
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""


class TimestampMixin:
    """Adds created_at/updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)


# SQLite INTEGER is a signed 64-bit value; the driver rejects anything outside it
SQLITE_INTEGER_MIN = -(2**63)
SQLITE_INTEGER_MAX = 2**63 - 1


def is_storable_integer(value: int) -> bool:
    """Return True if `value` fits in a SQLite INTEGER column."""
    return SQLITE_INTEGER_MIN <= value <= SQLITE_INTEGER_MAX
