"""
Library API: Borrowed Book SQLAlchemy Model
============================================

What:  ORM model for the ``borrowed_books`` join table.
How:   The (member_id, book_id) pair is the primary key; there is no
       surrogate id. A row exists exactly while the member holds the book,
       and it is deleted when the book is returned. No timestamps are kept.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base


class BorrowedBook(Base):
    """An active loan of one book to one member."""

    __tablename__ = "borrowed_books"

    member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("members.id", name="borrowed_books_member_id_fkey"),
        primary_key=True,
    )

    book_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("books.id", name="borrowed_books_book_id_fkey"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<BorrowedBook(member_id={self.member_id}, book_id={self.book_id})>"
