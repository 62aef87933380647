"""
Library API: Pydantic Schemas
==============================

Entity shapes shared by request bodies, store results and responses.
Schemas are separate from the SQLAlchemy models in ``library_api.models``.
"""

from library_api.schemas.author import Author
from library_api.schemas.book import Book
from library_api.schemas.borrowed import Borrowed
from library_api.schemas.common import (
    BookCreatedResponse,
    ErrorResponse,
    MessageResponse,
)
from library_api.schemas.member import Member

__all__ = [
    "Author",
    "Book",
    "BookCreatedResponse",
    "Borrowed",
    "ErrorResponse",
    "Member",
    "MessageResponse",
]
