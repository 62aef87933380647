"""
Library API: Book SQLAlchemy Model
===================================

What:  ORM model for the ``books`` table.
How:   ``authors_id`` is an optional foreign key to ``authors.id``. The
       constraint has no ON DELETE action, so PostgreSQL (and SQLite with
       foreign keys on) rejects deleting an author that still owns books.

Referenced by:
    borrowed_books.book_id (a borrowed book cannot be deleted)
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base


class Book(Base):
    """A book, optionally written by an author."""

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    authors_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("authors.id", name="books_authors_id_fkey"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    genre: Mapped[str] = mapped_column(Text, nullable=False, default="")
    isbn: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"
