"""Category model for grouping a user's bookmarks."""
from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, UnixTimestampMixin


class Category(Base, UnixTimestampMixin):
    """
    Category model.

    Names are unique per user ignoring case. That rule is enforced by the category
    service rather than a constraint, since SQLite unique indexes are case-sensitive.
    """

    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
