"""User model for registered accounts."""
from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, UnixTimestampMixin


class User(Base, UnixTimestampMixin):
    """User model - email is stored trimmed and lowercased."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="scrypt credential in the form salt:derived_key_hex",
    )
