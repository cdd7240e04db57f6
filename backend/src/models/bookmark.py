"""Bookmark model for storing user bookmarks."""
from sqlalchemy import ForeignKey, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, UnixTimestampMixin


class Bookmark(Base, UnixTimestampMixin):
    """Bookmark model - stores URLs with metadata, tags and an optional category."""

    __tablename__ = "bookmarks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # JSON-encoded array of strings
    tags: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'[]'"))
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )
