"""
Library API: Book Store
========================

What:  SQL implementation of BookStore over the ``books`` table.
Who:   Built once by the application lifespan; used by routes/books.py.

An empty ``authors_id`` is stored as NULL: the column is an optional
reference and an empty string would never satisfy the foreign key.
"""

import logging
from typing import List

from sqlalchemy import delete, func, insert, select, update

from library_api.exceptions import DatabaseError, RecordNotFoundError
from library_api.models import Book as BookRow
from library_api.schemas import Book
from library_api.stores.base import BookStore
from library_api.stores.sql import SQLStore

logger = logging.getLogger(__name__)


class SQLBookStore(SQLStore, BookStore):
    """Book persistence backed by SQLAlchemy."""

    async def create(self, book: Book) -> None:
        await self._write(
            insert(BookRow).values(
                id=book.id,
                authors_id=book.authors_id or None,
                title=book.title,
                genre=book.genre,
                isbn=book.isbn,
            ),
            "failed to create book",
            id=book.id,
            authors_id=book.authors_id,
        )

    async def get(self) -> List[Book]:
        rows = await self._read(
            select(
                BookRow.id,
                BookRow.authors_id,
                BookRow.title,
                BookRow.genre,
                BookRow.isbn,
            ),
            "select all failed for books",
        )
        return self._map_rows(Book, rows, "scanning selected failed for books")

    async def exists(self, book_id: str) -> None:
        try:
            rows = await self._read(
                select(func.count()).select_from(BookRow).where(BookRow.id == book_id),
                "select error for book",
                id=book_id,
            )
            count = rows[0][0]
        except (DatabaseError, IndexError, TypeError) as exc:
            raise RecordNotFoundError(
                resource="book",
                resource_id=book_id,
                context={"error": str(exc)},
            ) from exc

        if count != 1:
            logger.info("book does not exist id=%s", book_id)
            raise RecordNotFoundError(resource="book", resource_id=book_id)

    async def update(self, book_id: str, book: Book) -> None:
        await self._write(
            update(BookRow)
            .where(BookRow.id == book_id)
            .values(
                authors_id=book.authors_id or None,
                title=book.title,
                genre=book.genre,
                isbn=book.isbn,
            ),
            "update failed for book",
            id=book_id,
        )

    async def delete(self, book_id: str) -> None:
        await self._write(
            delete(BookRow).where(BookRow.id == book_id),
            "delete failed for books",
            id=book_id,
        )
