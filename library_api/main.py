"""
Library API: FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   ``create_app(settings)`` assembles middleware, exception handlers and
       routers. The lifespan handler opens the database pool, verifies it with
       a ping and attaches the stores to ``app.state``.
Who:   ``run()`` (the ``library-api`` console script), or
       ``uvicorn --factory library_api.main:create_app``.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  Request ID → Logging → Metrics → CORS              │
    │                                                     │
    │  Routes:                                            │
    │  /author*  /book*  /member*  /member/*/borrowed*    │
    │  /healthz  /metrics                                 │
    │                                                     │
    │  Exception Handlers:                                │
    │  ApiError→{key: message} │ StoreError/other→500     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Build the Database from Settings and ping it (fatal on failure)
    3. Attach Database and stores to app.state

    Shutdown (SIGINT / SIGTERM, handled by uvicorn):
    1. Finish in-flight requests
    2. Dispose the connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from library_api import __version__
from library_api.config import Settings, get_settings
from library_api.database import DRIVER_ERRORS, Database
from library_api.exceptions import ApiError, StoreError
from library_api.middleware.logging import RequestLoggingMiddleware
from library_api.middleware.metrics import PrometheusMiddleware, RequestMetrics
from library_api.middleware.request_id import RequestIDMiddleware, request_id_var
from library_api.routes import authors, books, borrowed, health, members, metrics
from library_api.stores import SQLAuthorStore, SQLBookStore, SQLBorrowedStore, SQLMemberStore

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "DELETE", "PATCH"]
CORS_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def attach_stores(app: FastAPI, database: Database) -> None:
    """Expose the database and one store per entity on ``app.state``."""
    app.state.database = database
    app.state.author_store = SQLAuthorStore(database)
    app.state.book_store = SQLBookStore(database)
    app.state.member_store = SQLMemberStore(database)
    app.state.borrowed_store = SQLBorrowedStore(database)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("Library API %s starting up...", __version__)

    database = Database(settings)
    try:
        await database.ping()
    except DRIVER_ERRORS as exc:
        logger.critical("error pinging database: %s", exc)
        await database.dispose()
        raise

    attach_stores(app, database)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("Library API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions onto the single-key JSON bodies clients expect.

    Handler hierarchy:
        ApiError               → exc.status_code, {exc.key: exc.message}
        RequestValidationError → 400 {"error": "bad request"}
        StoreError             → 500 {"error": "server error"}
        Exception (fallback)   → 500 {"error": "server error"}

    Driver messages and stack traces only go to the logs.
    """

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s %s: %s", rid, request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation error: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content={"error": "bad request"})

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": "server error"})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        return JSONResponse(status_code=500, content={"error": "server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration value; read from the environment when omitted
                  (which is what ``uvicorn --factory`` does).
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Library API",
        description="Manage authors, books, members and borrowed books.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.metrics = RequestMetrics()

    # Last added runs first: RequestID → Logging → Metrics → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        max_age=settings.cors_max_age,
    )
    app.add_middleware(PrometheusMiddleware, metrics=app.state.metrics)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(authors.router)
    app.include_router(books.router)
    app.include_router(members.router)
    app.include_router(borrowed.router)
    app.include_router(health.router)
    app.include_router(metrics.router)

    return app


def run() -> None:
    """Console entry point: load settings, then serve until SIGINT/SIGTERM."""
    try:
        settings = get_settings()
    except PydanticValidationError as exc:
        setup_logging()
        logger.critical("Configuration error: %s", exc)
        sys.exit(1)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        timeout_graceful_shutdown=30,
    )


if __name__ == "__main__":
    run()
