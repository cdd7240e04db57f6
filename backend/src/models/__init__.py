"""SQLAlchemy models."""
from models.base import Base, UnixTimestampMixin
from models.user import User
from models.category import Category
from models.bookmark import Bookmark

__all__ = [
    "Base",
    "Bookmark",
    "Category",
    "UnixTimestampMixin",
    "User",
]
