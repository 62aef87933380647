"""
Library API: Database Engine and Sessions
==========================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   ``Database`` wraps one AsyncEngine (the process-wide connection pool)
       and an ``async_sessionmaker``. Stores receive the Database and open a
       short-lived session per operation.
Who:   Built by the application lifespan from Settings; used by every store,
       the health check and the test fixtures.
When:  Created once at startup, disposed at shutdown.

Connection Pooling:
    pool_size / max_overflow come from Settings for PostgreSQL.
    SQLite uses SQLAlchemy's default pool and gets ``PRAGMA foreign_keys=ON``
    on every new connection so referential integrity behaves like PostgreSQL.
"""

import asyncio
import logging

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from library_api.config import Settings

logger = logging.getLogger(__name__)

# Failures a statement or ping can raise. asyncio.TimeoutError is not an
# OSError before Python 3.11.
DRIVER_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic and ``Database.create_all``
    read to build the schema.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    if settings.is_sqlite:
        engine = create_async_engine(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=settings.log_level == "DEBUG",
    )


class Database:
    """
    Owner of the connection pool for the lifetime of the process.

    Usage:
        database = Database(settings)
        await database.ping()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, settings: Settings, engine: AsyncEngine | None = None):
        self.engine = engine or build_engine(settings)
        # expire_on_commit=False: ORM rows stay readable after commit
        self.session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises the driver error when the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        """Create every table known to Base.metadata (tests and local SQLite runs)."""
        # Import models so they register with Base.metadata
        from library_api import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("Database connection pool closed")
