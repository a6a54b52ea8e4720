"""
Notes Service: FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application and runs it.
How:   create_app() wires settings, the Database resource, middleware,
       exception handlers and routes. run() serves the module-level app
       with uvicorn.
Who:   `notes-service` console script, or `uvicorn notes_service.main:app`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────┐ ┌─────────────────┐  │
    │  │   CORS   │→│  Request ID  │→│  Logging        │  │
    │  └──────────┘ └──────────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────┐ ┌─────────────┐ ┌──────────┐  │
    │  │ GET/POST /api/.. │ │ GET /health │ │GET /ready│  │
    │  └──────────────────┘ └─────────────┘ └──────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ValidationError→400 │ DatabaseError→500      │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Build the Database resource (unless one was injected)
    3. Ensure the notes table exists; any failure aborts startup, and
       uvicorn exits with a non-zero status

    Shutdown:
    1. Dispose the engine (close all pooled connections)
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

from notes_service import __version__
from notes_service.config import Settings, settings
from notes_service.database import Database
from notes_service.exceptions import DatabaseError, NotesServiceError, ValidationError
from notes_service.middleware.logging import RequestLoggingMiddleware
from notes_service.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_service.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure plain-text logging to stdout for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiomysql").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the pool and ensure the schema on startup; dispose it on shutdown.

    A failing schema initialization is fatal: the error is logged and
    re-raised so the server never starts accepting requests.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Notes Service %s starting up...", __version__)

    database: Optional[Database] = app.state.database
    if database is None:
        database = Database.from_settings(app_settings)
        app.state.database = database

    try:
        await database.init_schema()
    except Exception:
        logger.critical("Failed to initialize DB", exc_info=True)
        await database.dispose()
        raise

    logger.info("Backend listening on %d", app_settings.port)

    yield

    logger.info("Notes Service shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError          → 400 {"error": <message>}
        RequestValidationError   → 400 {"error": "invalid_request"}
        DatabaseError            → 500 {"error": "db_error"}
        NotesServiceError (base) → 500 {"error": "internal_error"}
        Exception (fallback)     → 500 {"error": "internal_error"}

    Response bodies never contain driver messages or stack traces.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Malformed request body: %s", request_id_var.get(""), exc.errors())
        return JSONResponse(status_code=400, content={"error": "invalid_request"})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content={"error": "db_error"})

    @app.exception_handler(NotesServiceError)
    async def handle_service_error(request: Request, exc: NotesServiceError):
        logger.error("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": "internal_error"})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(status_code=500, content={"error": "internal_error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: configuration; the module-level `settings` when omitted
        database:     a prebuilt Database (tests); otherwise one is built from
                      the settings during startup

    Returns:
        A configured FastAPI instance.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Notes Service API",
        description="Create and list short text notes.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = database

    # Middleware executes in REVERSE order of addition (last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `notes_service.main:app` to be importable
app = create_app()


def run() -> None:
    """
    Console entry point: serve the application on HOST:PORT.

    lifespan="on" makes a failed startup fatal; uvicorn then exits with a
    non-zero status.
    """
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
