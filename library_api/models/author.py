"""
Library API: Author SQLAlchemy Model
=====================================

What:  ORM model for the ``authors`` table.
How:   ``id`` is a UUID4 string generated by the create handler, not by the
       database. ``full_name`` is the only nullable column.

Referenced by:
    books.authors_id (no cascade: an author with books cannot be deleted)
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base


class Author(Base):
    """An author who owns zero or more books."""

    __tablename__ = "authors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    full_name: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    nick_name: Mapped[str] = mapped_column(Text, nullable=False, default="")

    specialization: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, nick_name='{self.nick_name}')>"
