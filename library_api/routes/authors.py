"""
Library API: Author Route Handlers
===================================

What:  CRUD endpoints for authors plus the author's book titles.
How:   Each handler parses the body (via ``json_body``), calls the
       AuthorStore and translates StoreErrors into ApiErrors. The global
       exception handler renders ApiErrors as ``{key: message}``.

Endpoints:
    GET    /authors                 list all authors
    POST   /author                  create (id generated here)
    PATCH  /author/{author_id}      existence check, then full update
    DELETE /author/{author_id}      delete; 400 while the author has books
    GET    /author/{author_id}/books  titles only
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
from library_api.routes.deps import get_author_store, json_body, request_body
from library_api.schemas import Author, ErrorResponse, MessageResponse
from library_api.stores import AuthorStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authors"])


@router.get(
    "/authors",
    response_model=List[Author],
    responses={
        404: {"description": "No authors", "model": MessageResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all authors",
)
async def list_authors(store: AuthorStore = Depends(get_author_store)) -> List[Author]:
    try:
        authors = await store.get()
    except StoreError as exc:
        raise ServerError() from exc

    if not authors:
        logger.info("authors not found")
        raise NotFoundError("authors not found", key="message")

    return authors


@router.post(
    "/author",
    status_code=201,
    openapi_extra=request_body(Author),
    response_model=MessageResponse,
    responses={400: {"description": "Invalid body or insert failed", "model": ErrorResponse}},
    summary="Create an author",
)
async def create_author(
    author: Author = Depends(json_body(Author, "author creation failed")),
    store: AuthorStore = Depends(get_author_store),
) -> MessageResponse:
    """
    Create an author with a freshly generated id.

    Any client-supplied ``id`` is replaced. Every store failure, including
    constraint violations, is reported as the same 400.
    """
    author = author.model_copy(update={"id": str(uuid.uuid4())})
    try:
        await store.create(author)
    except StoreError as exc:
        raise BadRequestError("author creation failed") from exc

    return MessageResponse(message="author created")


@router.patch(
    "/author/{author_id}",
    response_model=MessageResponse,
    openapi_extra=request_body(Author),
    responses={
        400: {"description": "Invalid body or update failed", "model": ErrorResponse},
        404: {"description": "Author not found", "model": ErrorResponse},
    },
    summary="Update an author",
)
async def update_author(
    author_id: str,
    author: Author = Depends(json_body(Author, "author update failed")),
    store: AuthorStore = Depends(get_author_store),
) -> MessageResponse:
    """
    Replace the author's mutable fields.

    The update statement only runs after ``exists`` confirms the id. The
    check and the write are separate round trips.
    """
    try:
        await store.exists(author_id)
    except StoreError as exc:
        raise NotFoundError("author not found") from exc

    try:
        await store.update(author_id, author)
    except StoreError as exc:
        raise BadRequestError("author update failed") from exc

    return MessageResponse(message="author updated")


@router.delete(
    "/author/{author_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Author still has books", "model": MessageResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete an author",
)
async def delete_author(
    author_id: str,
    store: AuthorStore = Depends(get_author_store),
) -> MessageResponse:
    try:
        await store.delete(author_id)
    except ForeignKeyViolationError as exc:
        raise BadRequestError(
            "author has related recordings and cannot be deleted", key="message"
        ) from exc
    except StoreError as exc:
        raise ServerError() from exc

    return MessageResponse(message="author deleted")


@router.get(
    "/author/{author_id}/books",
    response_model=List[str],
    responses={
        404: {"description": "Author has no books", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the titles of an author's books",
)
async def list_author_books(
    author_id: str,
    store: AuthorStore = Depends(get_author_store),
) -> List[str]:
    try:
        titles = await store.get_authors_books(author_id)
    except StoreError as exc:
        raise ServerError() from exc

    if not titles:
        logger.info("no books found for author id=%s", author_id)
        raise NotFoundError("book not found")

    return titles
