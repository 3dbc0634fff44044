"""
GeoJournal Backend — FastAPI Application Factory
=================================================

What:  Builds the journal API: middleware, error mapping, routers, lifespan.
How:   create_app() assembles a new FastAPI instance; the module-level `app`
       is the one served in production.
Who:   Called by uvicorn to start the server (uvicorn geojournal.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌────────────┐  │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│   CORS     │  │
    │  └──────────┘ └──────────┘ └──────┘ └────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /api/users  /api/journal  /health                  │
    │                                                     │
    │  Exception Handlers (Error Reporter):               │
    │  GeoJournalError → its status │ invalid body → 422  │
    │  anything else → 500                                │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Open the Database (and create tables when DB_CREATE_TABLES is set)
    4. Create the geocoding client

    Shutdown:
    1. Close the geocoding client's HTTP connections
    2. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from geojournal import __version__
from geojournal.config import settings
from geojournal.database import Database
from geojournal.exceptions import GeoJournalError, UnprocessableInputError
from geojournal.middleware.logging import RequestLoggingMiddleware
from geojournal.middleware.request_id import RequestIDMiddleware, request_id_var
from geojournal.routes import entries, health, users
from geojournal.services.google_geocoding import GoogleGeocodingService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before any other initialization.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Per-operation chatter from these libraries drowns the access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the process-scoped resources: database and geocoding client.

    Both are stored on `app.state` and reach handlers through dependencies.
    Resources already placed on `app.state` (tests) are used as-is.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("GeoJournal Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: users, listing and health still work without geocoding
        logger.error("Configuration error: %s", str(e))

    if getattr(app.state, "database", None) is None:
        app.state.database = Database()
    if settings.db_create_tables:
        await app.state.database.create_tables()

    if getattr(app.state, "geocoder", None) is None:
        app.state.geocoder = GoogleGeocodingService()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("GeoJournal Backend shutting down...")
    await app.state.geocoder.aclose()
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure to a status code and the standard error body.

    Handler hierarchy:
        RequestValidationError  → 422 unprocessable_input
        GeoJournalError         → exc.status_code / exc.error_code
        Exception (fallback)    → 500 internal_server_error

    Security: `context` and stack traces are logged server-side only.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body, path or query failed schema validation. Nothing was touched."""
        rid = request_id_var.get("")
        error = UnprocessableInputError()
        # Field locations only; submitted values may include passwords
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        logger.warning("[%s] Invalid input on %s: %s", rid, request.url.path, fields)
        return JSONResponse(
            status_code=error.status_code,
            content={
                "error": error.error_code,
                "message": error.message,
                "details": {"fields": fields},
                "request_id": rid,
            },
        )

    @app.exception_handler(GeoJournalError)
    async def handle_geojournal_error(request: Request, exc: GeoJournalError):
        """Any classified application error."""
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s",
                rid, type(exc).__name__, exc.message, exc.context,
            )
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, full traceback in the server log."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unknown error occurred!",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Assemble a GeoJournal FastAPI instance.

    Returns: Fully configured FastAPI instance. Tests build a fresh one per
    test and install their own database and geocoder.
    """
    app = FastAPI(
        title="GeoJournal API",
        description=(
            "Personal journal backend: user signup/login and journal entries "
            "pinned to geocoded locations."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: RequestID runs first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(users.router)
    app.include_router(entries.router)
    app.include_router(health.router)

    return app


# uvicorn expects `geojournal.main:app` to be importable
app = create_app()
