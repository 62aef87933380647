"""Library API: Member schema."""

from typing import ClassVar, FrozenSet, Optional

from pydantic import Field

from library_api.schemas.common import LibraryModel


class Member(LibraryModel):
    """A library member. Body of POST/PATCH /member; items of GET /members."""

    omit_when_empty: ClassVar[FrozenSet[str]] = frozenset({"id"})

    id: Optional[str] = Field(default=None, description="Server-generated identifier")
    full_name: str = Field(default="")
