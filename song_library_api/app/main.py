"""
Main entrypoint for the Song Library API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn song_library_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.db import init_db
from .core.exceptions import SongConflictError
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create the database file if needed, apply migrations and seed
    # sample songs on first initialization.
    init_db()
    yield


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # Drop the leading "body"/"path"/"query" marker from the location.
    loc = [str(part) for part in first.get("loc", ())[1:]]
    msg = first.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    """Map request and backend failures to ``{"message": ...}`` bodies."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _validation_message(exc)},
        )

    @app.exception_handler(SongConflictError)
    async def conflict_handler(request: Request, exc: SongConflictError) -> JSONResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Song update conflict"},
        )

    @app.exception_handler(sqlite3.Error)
    async def backend_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
        logger.error(
            "Database error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    This function performs one‑time setup tasks such as configuring
    logging, registering error handlers and including versioned API
    routers.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the setup below
    # can safely log messages.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    register_exception_handlers(app)

    # Songs live at /songs.  The same routes are also exposed under
    # /api for clients written against the earlier /api/songs paths.
    app.include_router(v1_router)
    app.include_router(v1_router, prefix="/api", include_in_schema=False)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
