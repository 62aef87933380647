"""
Library API: Route Dependencies
================================

What:  FastAPI dependencies shared by the route modules.
How:   Stores and the Database are created by the lifespan handler and kept
       on ``app.state``; these functions hand them to the routes. Tests swap
       them with ``app.dependency_overrides``.

Body parsing:
    ``json_body(schema, failure)`` builds a dependency that decodes the raw
    request body into ``schema``. A malformed body becomes a 400 with the
    endpoint's own failure message, raised before any store is touched.
    ``request_body(schema)`` documents that body in the OpenAPI operation,
    since FastAPI cannot see a body read from the raw request.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Type, TypeVar

from fastapi import Request
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from library_api.database import Database
from library_api.exceptions import BadRequestError
from library_api.stores import AuthorStore, BookStore, BorrowedStore, MemberStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_author_store(request: Request) -> AuthorStore:
    return request.app.state.author_store


def get_book_store(request: Request) -> BookStore:
    return request.app.state.book_store


def get_member_store(request: Request) -> MemberStore:
    return request.app.state.member_store


def get_borrowed_store(request: Request) -> BorrowedStore:
    return request.app.state.borrowed_store


def json_body(schema: Type[T] | Any, failure: str) -> Callable[[Request], Awaitable[T]]:
    """
    Build a dependency that parses the request body as ``schema``.

    Args:
        schema:  Pydantic model or any type TypeAdapter accepts (e.g. ``List[str]``)
        failure: Client message for the 400 response, e.g. "author creation failed"

    Example:
        author: Author = Depends(json_body(Author, "author creation failed"))
    """
    adapter = TypeAdapter(schema)

    async def parse(request: Request) -> T:
        raw = await request.body()
        try:
            return adapter.validate_json(raw)
        except PydanticValidationError as exc:
            logger.error(
                "body parsing failed path=%s error=%s",
                request.url.path,
                exc.errors(include_url=False),
            )
            raise BadRequestError(failure) from exc

    return parse


def request_body(schema: Type[T] | Any) -> Dict[str, Any]:
    """
    OpenAPI ``requestBody`` for a route that parses its body with ``json_body``.

    Nested models are referenced from ``#/components/schemas``. They must
    also appear in a response model, which is what makes FastAPI emit them.

    Example:
        @router.post("/author", openapi_extra=request_body(Author))
    """
    json_schema = TypeAdapter(schema).json_schema(ref_template="#/components/schemas/{model}")
    json_schema.pop("$defs", None)
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": json_schema}},
        }
    }
