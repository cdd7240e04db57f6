"""SQLAlchemy declarative base with common mixins."""
from sqlalchemy import Integer, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UnixTimestampMixin:
    """
    Mixin that adds a created_at column holding seconds since the epoch.

    D1 is SQLite, which has no timezone-aware timestamp type, so creation times are
    stored as integers. The application always supplies the value explicitly; the
    server default only covers rows inserted by hand.
    """

    created_at: Mapped[int] = mapped_column(
        Integer,
        server_default=text("(strftime('%s', 'now'))"),
        nullable=False,
    )
