"""
Library API: Exception Hierarchy
=================================

What:  Application-specific exceptions for the store layer and the HTTP layer.
How:   Stores raise StoreError subclasses carrying a message and a context dict.
       Route handlers catch them and raise ApiError subclasses, which the global
       handler registered in main.py renders as ``{key: message}`` JSON.
Who:   Raised by stores and routes; rendered by main.register_exception_handlers.

Exception Hierarchy:
    LibraryError (base)
    ├── StoreError                        (raised by stores, never rendered directly)
    │   ├── DatabaseError                 query / exec / row mapping failure
    │   │   └── ForeignKeyViolationError  dependent rows block the statement
    │   └── RecordNotFoundError           existence check found no row
    └── ApiError                          (raised by routes, rendered as JSON)
        ├── BadRequestError               → 400
        ├── NotFoundError                 → 404
        └── ServerError                   → 500
"""

from typing import Any, Dict, Optional


class LibraryError(Exception):
    """
    Base exception for all Library API errors.

    Attributes:
        message:  Short description (safe to return to clients for ApiError)
        context:  Debug details for the logs (never returned to clients)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


# ══════════════════════════════════════════════════════════════════════════
# Store Errors
# ══════════════════════════════════════════════════════════════════════════


class StoreError(LibraryError):
    """Base class for errors raised by the data access layer."""


class DatabaseError(StoreError):
    """
    Raised when a statement fails or a row cannot be mapped to an entity.

    The original driver exception is chained (``raise ... from exc``) and its
    text is kept in ``context["error"]`` for logging.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForeignKeyViolationError(DatabaseError):
    """
    Raised when a foreign-key constraint rejects a statement.

    When:  Deleting an author with books, a book with loans, or a member
           with loans. Inserting a book or loan that references a missing
           row raises it too, although create handlers do not distinguish it.
    """

    def __init__(
        self,
        message: str = "Foreign key constraint violated",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RecordNotFoundError(StoreError):
    """Raised by ``exists()`` when no single row matches the id."""

    def __init__(
        self,
        resource: str = "record",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} does not exist", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


# ══════════════════════════════════════════════════════════════════════════
# API Errors
# ══════════════════════════════════════════════════════════════════════════


class ApiError(LibraryError):
    """
    Base class for errors that map directly onto an HTTP response.

    The response body is a single-key JSON object. Most failures use the
    ``"error"`` key, but several endpoints answer with ``"message"`` (empty
    lists, foreign-key violations, member not found), so the key is part of
    the exception.

    Example:
        raise NotFoundError("authors not found", key="message")
        → 404 {"message": "authors not found"}
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        key: str = "error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.key = key

    def to_response(self) -> Dict[str, str]:
        return {self.key: self.message}


class BadRequestError(ApiError):
    """Malformed body, failed create/update, or a foreign-key violation on delete."""

    status_code = 400


class NotFoundError(ApiError):
    """Existence check failed or a list query returned no rows."""

    status_code = 404


class ServerError(ApiError):
    """Unclassified persistence failure."""

    status_code = 500

    def __init__(
        self,
        message: str = "server error",
        key: str = "error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, key=key, context=context)
