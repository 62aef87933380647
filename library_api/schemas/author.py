"""Library API: Author schema."""

from typing import ClassVar, FrozenSet, Optional

from pydantic import Field

from library_api.schemas.common import LibraryModel


class Author(LibraryModel):
    """
    What:  An author as sent and returned by the API.
    Who:   Body of POST /author and PATCH /author/{id}; items of GET /authors.
           Also embedded in Book, where only ``full_name`` is filled in.

    Example:
        {"id": "6da2643a-...", "full_name": "John Doe",
         "nick_name": "johndoe123", "specialization": "Writer"}
    """

    omit_when_empty: ClassVar[FrozenSet[str]] = frozenset(
        {"id", "nick_name", "specialization"}
    )

    id: Optional[str] = Field(default=None, description="Server-generated identifier")
    full_name: Optional[str] = Field(default=None, description="Full name (nullable)")
    nick_name: str = Field(default="", description="Nickname or pen name")
    specialization: str = Field(default="", description="Area of work, e.g. Writer")
