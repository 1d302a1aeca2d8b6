"""
Noteful Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` builds the Database, the stores and the routers, then
       wires them together. Dependencies flow through constructors:

           Settings → Database → FolderStore / NoteStore → routers

Who:   uvicorn (`uvicorn noteful.main:app`) and the test suite, which calls
       `create_app(settings, database)` with an in-memory SQLite database.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access Log → CORS        │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌───────────┐ ┌─────────────┐         │
    │  │ /notes   │ │ /folders  │ │ GET /health │         │
    │  └──────────┘ └───────────┘ └─────────────┘         │
    │                                                     │
    │  Exception Handlers:                                │
    │  ValidationError→400 │ NotFound→404 │ Store→500     │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from noteful import __version__
from noteful.config import Settings, settings as default_settings
from noteful.database import Database
from noteful.exceptions import NotefulError, NotFoundError, StoreError, ValidationError
from noteful.middleware.logging import RequestLoggingMiddleware
from noteful.middleware.request_id import RequestIDMiddleware
from noteful.routes.folders import create_folders_router
from noteful.routes.health import create_health_router
from noteful.routes.notes import create_notes_router
from noteful.schemas.common import error_body
from noteful.services.folder_store import FolderStore
from noteful.services.note_store import NoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Handler: stdout (captured by Docker / the process supervisor)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; SQL echo is controlled by the engine
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


def _describe_request_error(exc: RequestValidationError) -> str:
    """Turns FastAPI's schema errors into one message in the API's wording."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    loc = errors[0].get("loc", ())
    if loc and loc[0] == "body":
        return "Request body must be a JSON object"
    if len(loc) >= 2:
        return f"Invalid {loc[0]} parameter '{loc[-1]}'"
    return "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

    Handler hierarchy:
        ValidationError (+ MissingField, NoUpdatableFields) → 400
        RequestValidationError (malformed JSON, non-int id)  → 400
        NotFoundError                                        → 404
        StoreError                                           → 500
        NotefulError (base)                                  → its status_code
        Exception (fallback)                                 → 500

    Every response body has the shape {"error": {"message": "..."}}.
    Internal details (SQL, stack traces) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return JSONResponse(status_code=400, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = _describe_request_error(exc)
        logger.warning("[%s] Malformed request: %s", _request_id(request), exc.errors())
        return JSONResponse(status_code=400, content=error_body(message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=error_body(exc.message))

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s",
            _request_id(request), exc.message, exc.context,
        )
        return JSONResponse(status_code=500, content=error_body(exc.message))

    @app.exception_handler(NotefulError)
    async def handle_noteful_error(request: Request, exc: NotefulError):
        logger.error("[%s] %s: %s", _request_id(request), type(exc).__name__, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("An unexpected error occurred. Please try again later."),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-loaded settings.
        database: Pre-built Database (tests pass in-memory SQLite). When
                  omitted, one is built from `settings.database_url`.

    Returns:
        Fully wired FastAPI instance. `app.state.database` holds the
        Database so the lifespan handler can dispose it.
    """
    settings = settings or default_settings
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(settings.log_level)
        logger.info("Noteful Backend %s starting up...", __version__)
        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Noteful Backend shutting down...")
        await database.dispose()
        logger.info("Shutdown complete.")

    app = FastAPI(
        title="Noteful API",
        description="Notes filed in folders: create, read, update and delete over REST.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    folder_store = FolderStore(database)
    note_store = NoteStore(database)

    app.include_router(create_notes_router(note_store))
    app.include_router(create_folders_router(folder_store, note_store))
    app.include_router(create_health_router(database))

    return app


# uvicorn expects `noteful.main:app` to be importable
app = create_app()
