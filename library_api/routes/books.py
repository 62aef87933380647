"""
Library API: Book Route Handlers
=================================

Endpoints:
    GET    /books             list all books
    POST   /book              create; responds with the generated id
    PATCH  /book/{book_id}    existence check, then full update
    DELETE /book/{book_id}    delete; 400 while the book is borrowed
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends

from library_api.exceptions import (
    BadRequestError,
    ForeignKeyViolationError,
    NotFoundError,
    ServerError,
    StoreError,
)
from library_api.routes.deps import get_book_store, json_body, request_body
from library_api.schemas import Book, BookCreatedResponse, ErrorResponse, MessageResponse
from library_api.stores import BookStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Books"])


@router.get(
    "/books",
    response_model=List[Book],
    responses={
        404: {"description": "No books", "model": MessageResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all books",
)
async def list_books(store: BookStore = Depends(get_book_store)) -> List[Book]:
    try:
        books = await store.get()
    except StoreError as exc:
        raise ServerError() from exc

    if not books:
        logger.info("no books found")
        raise NotFoundError("no books found", key="message")

    return books


@router.post(
    "/book",
    status_code=201,
    openapi_extra=request_body(Book),
    response_model=BookCreatedResponse,
    responses={400: {"description": "Invalid body or insert failed", "model": ErrorResponse}},
    summary="Create a book",
)
async def create_book(
    book: Book = Depends(json_body(Book, "book creation failed")),
    store: BookStore = Depends(get_book_store),
) -> BookCreatedResponse:
    book = book.model_copy(update={"id": str(uuid.uuid4())})
    try:
        await store.create(book)
    except StoreError as exc:
        raise BadRequestError("book creation failed") from exc

    return BookCreatedResponse(id=book.id, message="book created")


@router.patch(
    "/book/{book_id}",
    response_model=MessageResponse,
    openapi_extra=request_body(Book),
    responses={
        400: {"description": "Invalid body or update failed", "model": ErrorResponse},
        404: {"description": "Book not found", "model": ErrorResponse},
    },
    summary="Update a book",
)
async def update_book(
    book_id: str,
    book: Book = Depends(json_body(Book, "book update failed")),
    store: BookStore = Depends(get_book_store),
) -> MessageResponse:
    try:
        await store.exists(book_id)
    except StoreError as exc:
        raise NotFoundError("book not found") from exc

    try:
        await store.update(book_id, book)
    except StoreError as exc:
        raise BadRequestError("book update failed") from exc

    return MessageResponse(message="book updated")


@router.delete(
    "/book/{book_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Book is borrowed", "model": MessageResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a book",
)
async def delete_book(
    book_id: str,
    store: BookStore = Depends(get_book_store),
) -> MessageResponse:
    try:
        await store.delete(book_id)
    except ForeignKeyViolationError as exc:
        raise BadRequestError(
            "book has related recordings and cannot be deleted", key="message"
        ) from exc
    except StoreError as exc:
        raise ServerError() from exc

    return MessageResponse(message="book deleted")
