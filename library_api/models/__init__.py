"""
Library API: ORM Models
========================

Importing this package registers every table with ``Base.metadata``
(used by Alembic and ``Database.create_all``).

Tables:
    authors          ← books.authors_id
    books            ← borrowed_books.book_id
    members          ← borrowed_books.member_id
    borrowed_books   (member_id, book_id) join table, one row per active loan
"""

from library_api.models.author import Author
from library_api.models.book import Book
from library_api.models.borrowed import BorrowedBook
from library_api.models.member import Member

__all__ = ["Author", "Book", "BorrowedBook", "Member"]
