"""
Library API: Data Access Layer
===============================

What:  Stores that issue parameterized SQL, map rows to schemas and classify
       database errors.

Store Inventory:
    - base.py:            abstract contracts (AuthorStore, BookStore, MemberStore, BorrowedStore)
    - sql.py:             shared session handling and foreign-key error classification
    - author_store.py:    SQLAuthorStore
    - book_store.py:      SQLBookStore
    - member_store.py:    SQLMemberStore
    - borrowed_store.py:  SQLBorrowedStore
"""

from library_api.stores.author_store import SQLAuthorStore
from library_api.stores.base import AuthorStore, BookStore, BorrowedStore, MemberStore
from library_api.stores.book_store import SQLBookStore
from library_api.stores.borrowed_store import SQLBorrowedStore
from library_api.stores.member_store import SQLMemberStore

__all__ = [
    "AuthorStore",
    "BookStore",
    "BorrowedStore",
    "MemberStore",
    "SQLAuthorStore",
    "SQLBookStore",
    "SQLBorrowedStore",
    "SQLMemberStore",
]
