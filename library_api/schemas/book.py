"""Library API: Book schema."""

from typing import ClassVar, FrozenSet, Optional

from pydantic import Field

from library_api.schemas.author import Author
from library_api.schemas.common import LibraryModel


class Book(LibraryModel):
    """
    What:  A book as sent and returned by the API.
    Who:   Body of POST /book and PATCH /book/{id}; items of GET /books and
           GET /member/{id}/borrowed.

    The embedded ``author`` is only populated by the borrowed-books query,
    where it carries the author's ``full_name``. Everywhere else it
    serializes as ``{"full_name": null}``.
    """

    omit_when_empty: ClassVar[FrozenSet[str]] = frozenset({"id", "authors_id"})

    id: Optional[str] = Field(default=None, description="Server-generated identifier")
    authors_id: Optional[str] = Field(default=None, description="Id of the writing author")
    title: str = Field(default="")
    genre: str = Field(default="")
    isbn: str = Field(default="")
    author: Author = Field(default_factory=Author, description="Author snapshot")
