"""
Library API: Borrowed Store
============================

What:  SQL implementation of BorrowedStore over the ``borrowed_books`` join
       table.
Who:   Built once by the application lifespan; used by routes/borrowed.py.

Member's books query (three-way inner join):
    SELECT books.title, authors.full_name, books.genre, books.isbn
    FROM books
    JOIN authors        ON authors.id = books.authors_id
    JOIN borrowed_books ON borrowed_books.book_id = books.id
    WHERE borrowed_books.member_id = :member_id

    Books without an author do not appear in the result.
"""

import logging
from typing import List

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Row

from library_api.exceptions import DatabaseError
from library_api.models import Author as AuthorRow
from library_api.models import Book as BookRow
from library_api.models import BorrowedBook as BorrowedRow
from library_api.schemas import Author, Book, Borrowed
from library_api.stores.base import BorrowedStore
from library_api.stores.sql import SQLStore

logger = logging.getLogger(__name__)


def _book_from_row(row: Row) -> Book:
    return Book(
        title=row.title,
        genre=row.genre,
        isbn=row.isbn,
        author=Author(full_name=row.full_name),
    )


class SQLBorrowedStore(SQLStore, BorrowedStore):
    """Loan persistence backed by SQLAlchemy."""

    async def create(self, borrowed: Borrowed) -> None:
        await self._write(
            insert(BorrowedRow).values(
                member_id=borrowed.member_id,
                book_id=borrowed.book_id,
            ),
            "failed to create borrowed book",
            member_id=borrowed.member_id,
            book_id=borrowed.book_id,
        )

    async def get(self, member_id: str) -> List[Book]:
        rows = await self._read(
            select(BookRow.title, AuthorRow.full_name, BookRow.genre, BookRow.isbn)
            .join(AuthorRow, AuthorRow.id == BookRow.authors_id)
            .join(BorrowedRow, BorrowedRow.book_id == BookRow.id)
            .where(BorrowedRow.member_id == member_id),
            "get books failed for member",
            id=member_id,
        )
        try:
            return [_book_from_row(row) for row in rows]
        except (AttributeError, ValueError) as exc:
            logger.error("scanning selected failed for books of member id=%s error=%s", member_id, exc)
            raise DatabaseError(
                message="scanning selected failed for books of member",
                context={"id": member_id, "error": str(exc)},
            ) from exc

    async def delete(self, member_id: str, book_id: str) -> None:
        await self._write(
            delete(BorrowedRow).where(
                BorrowedRow.member_id == member_id,
                BorrowedRow.book_id == book_id,
            ),
            "delete book failed for member",
            member_id=member_id,
            book_id=book_id,
        )

    async def delete_list(self, member_id: str, book_ids: List[str]) -> None:
        await self._write(
            delete(BorrowedRow).where(
                BorrowedRow.member_id == member_id,
                BorrowedRow.book_id.in_(book_ids),
            ),
            "delete list of books failed for member",
            member_id=member_id,
            count=len(book_ids),
        )
