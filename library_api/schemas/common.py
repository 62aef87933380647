"""
Library API: Shared Schema Base and Response Envelopes
=======================================================

What:  ``LibraryModel`` base class plus the small JSON envelopes returned by
       mutation endpoints and error paths.

Empty-field omission:
    Entity JSON drops some keys when they are empty (for example an Author
    without an id serializes without ``"id"``) while others are always
    present even when null (``full_name``). Each entity lists its optional
    keys in ``omit_when_empty``; the wrap serializer removes them from the
    output when their value is ``None`` or ``""``.
"""

from typing import ClassVar, FrozenSet

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)


class LibraryModel(BaseModel):
    """Base for entity schemas: reads ORM rows, ignores unknown body keys."""

    omit_when_empty: ClassVar[FrozenSet[str]] = frozenset()

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    # Unannotated return: JSON schemas keep the declared fields
    @model_serializer(mode="wrap")
    def omit_empty_fields(self, handler: SerializerFunctionWrapHandler):
        data = handler(self)
        return {
            key: value
            for key, value in data.items()
            if not (key in self.omit_when_empty and value in (None, ""))
        }


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Confirmation body, e.g. ``{"message": "author created"}``."""
    message: str = Field(description="Human-readable confirmation")


class BookCreatedResponse(BaseModel):
    """Body of ``POST /book``: the generated id plus a confirmation."""
    id: str = Field(description="Generated book identifier")
    message: str = Field(default="book created")


class ErrorResponse(BaseModel):
    """Error body, e.g. ``{"error": "server error"}``."""
    error: str = Field(description="Short, generic error description")
