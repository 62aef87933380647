"""
Library API: Shared SQL Store Plumbing
=======================================

What:  Base class for the SQLAlchemy-backed stores and the database error
       classifier.
How:   Every store operation opens its own AsyncSession from the shared
       Database, executes exactly one parameterized statement, commits (for
       writes) and closes the session. Failures are logged where they occur,
       with the operation and ids, then re-raised as classified StoreErrors.

Foreign-key detection:
    1. SQLSTATE 23503 on the DBAPI error or its cause (asyncpg / psycopg)
    2. SQLITE_CONSTRAINT_FOREIGNKEY error name (sqlite3, Python 3.11+)
    3. Fallback: the driver's message text
"""

import logging
from typing import Any, Dict, Iterable, List, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import Executable

from library_api.database import DRIVER_ERRORS, Database
from library_api.exceptions import DatabaseError, ForeignKeyViolationError

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

FOREIGN_KEY_VIOLATION_SQLSTATE = "23503"
SQLITE_FOREIGN_KEY_ERROR = "SQLITE_CONSTRAINT_FOREIGNKEY"
FOREIGN_KEY_MESSAGES = (
    "violates foreign key constraint",
    "FOREIGN KEY constraint failed",
)


def is_foreign_key_violation(exc: BaseException) -> bool:
    """Return True when ``exc`` is an integrity error raised by a foreign key."""
    if not isinstance(exc, IntegrityError):
        return False

    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code == FOREIGN_KEY_VIOLATION_SQLSTATE:
            return True
        if getattr(candidate, "sqlite_errorname", None) == SQLITE_FOREIGN_KEY_ERROR:
            return True

    text = str(orig) if orig is not None else str(exc)
    return any(marker in text for marker in FOREIGN_KEY_MESSAGES)


def classify_error(exc: BaseException, message: str, context: Dict[str, Any]) -> DatabaseError:
    """Wrap a driver or SQLAlchemy error in the matching StoreError subclass."""
    ctx = dict(context, error=str(exc))
    if is_foreign_key_violation(exc):
        return ForeignKeyViolationError(message=message, context=ctx)
    return DatabaseError(message=message, context=ctx)


def _describe(context: Dict[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in context.items())


class SQLStore:
    """
    Base for SQL store implementations.

    Subclasses build statements with SQLAlchemy Core and hand them to
    ``_write`` (INSERT / UPDATE / DELETE) or ``_read`` (SELECT).
    """

    def __init__(self, database: Database):
        self._database = database

    async def _write(self, statement: Executable, failure: str, **context: Any) -> None:
        """Execute one data-modifying statement in its own transaction."""
        try:
            async with self._database.session() as session:
                await session.execute(statement)
                await session.commit()
        except DRIVER_ERRORS as exc:
            logger.error("%s %s error=%s", failure, _describe(context), exc)
            raise classify_error(exc, failure, context) from exc

    async def _read(self, statement: Executable, failure: str, **context: Any) -> Sequence[Row]:
        """Execute one SELECT and return all rows."""
        try:
            async with self._database.session() as session:
                result = await session.execute(statement)
                return result.all()
        except DRIVER_ERRORS as exc:
            logger.error("%s %s error=%s", failure, _describe(context), exc)
            raise classify_error(exc, failure, context) from exc

    def _map_rows(
        self,
        schema: Type[SchemaT],
        rows: Iterable[Any],
        failure: str,
        **context: Any,
    ) -> List[SchemaT]:
        """Map result rows onto ``schema``; a mismatching row raises DatabaseError."""
        try:
            return [schema.model_validate(row) for row in rows]
        except PydanticValidationError as exc:
            logger.error("%s %s error=%s", failure, _describe(context), exc)
            raise DatabaseError(
                message=failure,
                context=dict(context, error=str(exc)),
            ) from exc
