"""
Library API: Author Store
==========================

What:  SQL implementation of AuthorStore over the ``authors`` table.
Who:   Built once by the application lifespan; used by routes/authors.py.

Statements:
    get                SELECT id, full_name, nick_name, specialization FROM authors
    create             INSERT INTO authors (...) VALUES (...)
    exists             SELECT count(*) FROM authors WHERE id = :id
    update             UPDATE authors SET ... WHERE id = :id
    delete             DELETE FROM authors WHERE id = :id
    get_authors_books  SELECT title FROM books WHERE authors_id = :id
"""

import logging
from typing import List

from sqlalchemy import delete, func, insert, select, update

from library_api.exceptions import DatabaseError, RecordNotFoundError
from library_api.models import Author as AuthorRow
from library_api.models import Book as BookRow
from library_api.schemas import Author
from library_api.stores.base import AuthorStore
from library_api.stores.sql import SQLStore

logger = logging.getLogger(__name__)


class SQLAuthorStore(SQLStore, AuthorStore):
    """Author persistence backed by SQLAlchemy."""

    async def get(self) -> List[Author]:
        rows = await self._read(
            select(
                AuthorRow.id,
                AuthorRow.full_name,
                AuthorRow.nick_name,
                AuthorRow.specialization,
            ),
            "select all request failed for authors",
        )
        return self._map_rows(Author, rows, "scanning selected failed for authors")

    async def create(self, author: Author) -> None:
        await self._write(
            insert(AuthorRow).values(
                id=author.id,
                full_name=author.full_name,
                nick_name=author.nick_name,
                specialization=author.specialization,
            ),
            "failed to create author",
            id=author.id,
        )

    async def exists(self, author_id: str) -> None:
        try:
            rows = await self._read(
                select(func.count()).select_from(AuthorRow).where(AuthorRow.id == author_id),
                "select error for author",
                id=author_id,
            )
            count = rows[0][0]
        except (DatabaseError, IndexError, TypeError) as exc:
            raise RecordNotFoundError(
                resource="author",
                resource_id=author_id,
                context={"error": str(exc)},
            ) from exc

        if count != 1:
            logger.info("author does not exist id=%s", author_id)
            raise RecordNotFoundError(resource="author", resource_id=author_id)

    async def update(self, author_id: str, author: Author) -> None:
        await self._write(
            update(AuthorRow)
            .where(AuthorRow.id == author_id)
            .values(
                full_name=author.full_name,
                nick_name=author.nick_name,
                specialization=author.specialization,
            ),
            "update failed for author",
            id=author_id,
        )

    async def delete(self, author_id: str) -> None:
        await self._write(
            delete(AuthorRow).where(AuthorRow.id == author_id),
            "delete failed for authors",
            id=author_id,
        )

    async def get_authors_books(self, author_id: str) -> List[str]:
        rows = await self._read(
            select(BookRow.title).where(BookRow.authors_id == author_id),
            "select for get for authors books failed",
            id=author_id,
        )
        return [row.title for row in rows]
