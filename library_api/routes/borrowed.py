"""
Library API: Borrowed Book Route Handlers
==========================================

What:  Loan endpoints: borrow a book, list a member's books, return one or
       many books.

Endpoints:
    GET    /member/{member_id}/borrowed             books the member holds
    POST   /member/borrowed                         borrow (body: member_id, book_id)
    DELETE /member/{member_id}/borrowed/{book_id}   return one book
    DELETE /member/{member_id}/borrowed             return many (body: ["book-id", ...])

Returning books never checks that the loan existed: deleting zero rows is
still a success.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from library_api.exceptions import BadRequestError, NotFoundError, ServerError, StoreError
from library_api.routes.deps import get_borrowed_store, json_body, request_body
from library_api.schemas import Book, Borrowed, ErrorResponse, MessageResponse
from library_api.stores import BorrowedStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Borrowed"])


@router.get(
    "/member/{member_id}/borrowed",
    response_model=List[Book],
    responses={
        404: {"description": "Member holds no books", "model": MessageResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the books a member has borrowed",
)
async def list_borrowed_books(
    member_id: str,
    store: BorrowedStore = Depends(get_borrowed_store),
) -> List[Book]:
    try:
        books = await store.get(member_id)
    except StoreError as exc:
        raise ServerError() from exc

    if not books:
        logger.info("no books found for this member id=%s", member_id)
        raise NotFoundError("no books found for this member", key="message")

    return books


@router.post(
    "/member/borrowed",
    status_code=201,
    openapi_extra=request_body(Borrowed),
    response_model=MessageResponse,
    responses={400: {"description": "Invalid body or insert failed", "model": ErrorResponse}},
    summary="Borrow a book",
)
async def create_borrowed(
    borrowed: Borrowed = Depends(json_body(Borrowed, "borrowed book creation failed")),
    store: BorrowedStore = Depends(get_borrowed_store),
) -> MessageResponse:
    try:
        await store.create(borrowed)
    except StoreError as exc:
        raise BadRequestError("borrowed book creation failed") from exc

    return MessageResponse(message="borrowed book created")


@router.delete(
    "/member/{member_id}/borrowed/{book_id}",
    response_model=MessageResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Return one borrowed book",
)
async def delete_borrowed(
    member_id: str,
    book_id: str,
    store: BorrowedStore = Depends(get_borrowed_store),
) -> MessageResponse:
    try:
        await store.delete(member_id, book_id)
    except StoreError as exc:
        raise ServerError() from exc

    return MessageResponse(message="borrowed book deleted")


@router.delete(
    "/member/{member_id}/borrowed",
    response_model=MessageResponse,
    openapi_extra=request_body(List[str]),
    responses={
        400: {"description": "Body is not a list of book ids", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Return several borrowed books at once",
)
async def delete_borrowed_list(
    member_id: str,
    book_ids: List[str] = Depends(json_body(List[str], "borrowed book delete failed")),
    store: BorrowedStore = Depends(get_borrowed_store),
) -> MessageResponse:
    try:
        await store.delete_list(member_id, book_ids)
    except StoreError as exc:
        raise ServerError() from exc

    return MessageResponse(message="borrowed books deleted")
