"""
Library API: Abstract Store Interfaces
=======================================

What:  One abstract base class per entity describing the persistence
       operations its route handlers rely on.
How:   The SQL implementations in this package inherit from these classes.
       Routes receive a store through a FastAPI dependency typed with the
       abstract class, so tests substitute ``AsyncMock(spec=AuthorStore)``.

Error contract (all implementations):
    - Never return HTTP concepts and never swallow failures.
    - Statement or row-mapping failure    → DatabaseError
    - Foreign-key constraint violation    → ForeignKeyViolationError
    - ``exists`` with no matching row     → RecordNotFoundError
    - Empty result sets are returned as empty lists; deciding that "empty"
      means 404 is the handler's job.
"""

from abc import ABC, abstractmethod
from typing import List

from library_api.schemas import Author, Book, Borrowed, Member


class AuthorStore(ABC):
    """Persistence contract for authors."""

    @abstractmethod
    async def create(self, author: Author) -> None:
        """Insert ``author``; its ``id`` must already be set."""
        ...

    @abstractmethod
    async def get(self) -> List[Author]:
        """Return every author in database row order."""
        ...

    @abstractmethod
    async def exists(self, author_id: str) -> None:
        """Raise RecordNotFoundError unless exactly one author has ``author_id``."""
        ...

    @abstractmethod
    async def update(self, author_id: str, author: Author) -> None:
        """Replace all mutable fields of the author keyed by ``author_id``."""
        ...

    @abstractmethod
    async def delete(self, author_id: str) -> None:
        """Hard-delete the author; ForeignKeyViolationError if books reference it."""
        ...

    @abstractmethod
    async def get_authors_books(self, author_id: str) -> List[str]:
        """Return the titles of the author's books."""
        ...


class BookStore(ABC):
    """Persistence contract for books."""

    @abstractmethod
    async def create(self, book: Book) -> None:
        ...

    @abstractmethod
    async def get(self) -> List[Book]:
        ...

    @abstractmethod
    async def exists(self, book_id: str) -> None:
        ...

    @abstractmethod
    async def update(self, book_id: str, book: Book) -> None:
        ...

    @abstractmethod
    async def delete(self, book_id: str) -> None:
        """Hard-delete the book; ForeignKeyViolationError while it is borrowed."""
        ...


class MemberStore(ABC):
    """Persistence contract for members."""

    @abstractmethod
    async def create(self, member: Member) -> None:
        ...

    @abstractmethod
    async def get(self) -> List[Member]:
        ...

    @abstractmethod
    async def exists(self, member_id: str) -> None:
        ...

    @abstractmethod
    async def update(self, member_id: str, member: Member) -> None:
        ...

    @abstractmethod
    async def delete(self, member_id: str) -> None:
        """Hard-delete the member; ForeignKeyViolationError while they hold loans."""
        ...


class BorrowedStore(ABC):
    """Persistence contract for loans (the borrowed_books join table)."""

    @abstractmethod
    async def create(self, borrowed: Borrowed) -> None:
        """Record that ``borrowed.member_id`` holds ``borrowed.book_id``."""
        ...

    @abstractmethod
    async def get(self, member_id: str) -> List[Book]:
        """
        Return the books a member currently holds.

        Each Book carries ``title``, ``genre``, ``isbn`` and an ``author``
        with only ``full_name`` set.
        """
        ...

    @abstractmethod
    async def delete(self, member_id: str, book_id: str) -> None:
        """Return a single book."""
        ...

    @abstractmethod
    async def delete_list(self, member_id: str, book_ids: List[str]) -> None:
        """Return several books in one statement; succeeds or fails as a unit."""
        ...
