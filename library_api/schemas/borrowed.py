"""Library API: Borrowed (loan) schema."""

from pydantic import Field

from library_api.schemas.common import LibraryModel


class Borrowed(LibraryModel):
    """
    An active loan linking a member to a book. Body of POST /member/borrowed.

    There is no surrogate id: the (member_id, book_id) pair identifies the loan.
    """

    member_id: str = Field(default="", description="Borrowing member")
    book_id: str = Field(default="", description="Borrowed book")
