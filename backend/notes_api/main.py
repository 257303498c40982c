"""
Notes API — Application Factory
================================

Run with:  uvicorn notes_api.main:app --reload

Wiring:
    RateLimit → RequestContext → GZip → CORS → routes
    routes:   /api/notes (CRUD + listing), /health
    errors:   ValidationError 400, NotFoundError 404, anything else 500

Every error body has the same shape:
    {"error": "...", "message": "...", "details": {...}, "request_id": "..."}
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notes_api import __version__
from notes_api.config import settings
from notes_api.database import dispose_engine, init_models
from notes_api.exceptions import (
    DatabaseError,
    NotesAPIError,
    NotFoundError,
    ValidationError,
)
from notes_api.middleware.rate_limit import RateLimitMiddleware
from notes_api.middleware.request_context import RequestContextMiddleware, request_id_var
from notes_api.routes import health, notes

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "An internal error occurred. Please try again later."


def setup_logging() -> None:
    """Plain-text records to stdout at LOG_LEVEL; library loggers kept quiet."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in ("uvicorn.access", "sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info(
        "Notes API %s starting (database: %s)",
        __version__, "sqlite" if settings.is_sqlite else "server",
    )
    if settings.db_create_tables:
        await init_models()

    yield

    await dispose_engine()
    logger.info("Notes API stopped")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"error": error, "message": message}
    if details:
        content["details"] = details
    content["request_id"] = request_id_var.get("")
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map domain errors to HTTP.

    Store failures and unexpected errors are logged with their context and
    answered with a generic message; SQL and stack traces never reach the
    client.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message, exc.context)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Store failure on %s %s: %s | %s",
                     request.method, request.url.path, exc.message, exc.context)
        return error_response(500, "server_error", GENERIC_FAILURE)

    @app.exception_handler(NotesAPIError)
    async def handle_app_error(request: Request, exc: NotesAPIError):
        logger.error("Unhandled application error: %s | %s", exc.message, exc.context)
        return error_response(500, "server_error", GENERIC_FAILURE)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(500, "internal_server_error", GENERIC_FAILURE)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Notes API",
        description=(
            "Create, read, update and delete short text notes, and list them "
            "with filtering, sorting and pagination."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Added innermost first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Location", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)
    return app


app = create_app()
