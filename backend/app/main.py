"""
TextShelf Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Keeps all app wiring in one function, so tests can build an isolated
       app per case.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn app.main:app, or python -m app) and by tests.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Request ID  │→│ Logging  │→│  GZip (opt-out) │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ /api/resource│ │ /health  │ │ /* index page   │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Invalid→400 │ NotFound→404 │ SearchFailed→500│   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Load the bootstrap file into a ResourceStore (unless one was injected)
       A BootstrapError aborts startup.

    Shutdown:
    1. Log the final resource count (nothing is persisted)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from app import __version__
from app.config import settings
from app.exceptions import (
    BootstrapError,
    InvalidInputError,
    InvalidQueryError,
    NotFoundError,
    SearchFailedError,
    TextShelfError,
)
from app.middleware.compression import OptionalGZipMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.responses import PrettyJSONResponse
from app.routes import health, pages, resources
from app.services.bootstrap import build_store
from app.services.resource_store import ResourceStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] app.services.resource_store: Created resource 4

    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # containers capture stdout
        ],
        force=True,
    )

    # uvicorn's own access log duplicates textshelf.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Load the resource store on startup; report on shutdown.

    When create_app() received a store, bootstrap loading is skipped.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("TextShelf Backend %s starting up...", __version__)

    if getattr(app.state, "store", None) is None:
        try:
            app.state.store = await build_store(settings.resources_file)
        except BootstrapError as e:
            logger.error("Bootstrap failed: %s", e.message)
            logger.error("Fix RESOURCES_FILE and restart the server.")
            raise

    logger.info("Serving %d resources", app.state.store.count)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info(
        "TextShelf Backend shutting down; %d resources discarded.",
        app.state.store.count,
    )


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message}
    if details:
        body["details"] = details
    body["request_id"] = request_id_var.get("")
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map store exceptions to HTTP status codes and JSON error bodies.

    Handler hierarchy:
        InvalidQueryError       → 400 invalid_query
        InvalidInputError       → 400 validation_error
        RequestValidationError  → 400 validation_error (malformed body/params)
        NotFoundError           → 404 not_found
        SearchFailedError       → 500 search_failed
        TextShelfError (base)   → 500 server_error
        Exception (fallback)    → 500 internal_server_error

    5xx bodies never include internal details; those go to the server log.
    """

    @app.exception_handler(InvalidQueryError)
    async def handle_invalid_query(request: Request, exc: InvalidQueryError):
        return PrettyJSONResponse(
            status_code=400,
            content=_error_body("invalid_query", exc.message, exc.context),
        )

    @app.exception_handler(InvalidInputError)
    async def handle_invalid_input(request: Request, exc: InvalidInputError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return PrettyJSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        fields = [".".join(str(part) for part in err.get("loc", ())) for err in errors]
        message = "Invalid request"
        if errors:
            message = f"Invalid request: {errors[0].get('msg', 'validation failed')}"
        logger.warning("[%s] Request validation error: %s", request_id_var.get(""), fields)
        return PrettyJSONResponse(
            status_code=400,
            content=_error_body("validation_error", message, {"fields": fields}),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PrettyJSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(SearchFailedError)
    async def handle_search_failed(request: Request, exc: SearchFailedError):
        logger.error(
            "[%s] Search failed: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return PrettyJSONResponse(
            status_code=500,
            content=_error_body("search_failed", exc.message),
        )

    @app.exception_handler(TextShelfError)
    async def handle_app_error(request: Request, exc: TextShelfError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return PrettyJSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Generic 500; the stack trace is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PrettyJSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[ResourceStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Pre-built store to serve. When omitted, the lifespan hook
               loads one from settings.resources_file at startup.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="TextShelf API",
        description=(
            "A small collection of text resources with list, search, random "
            "fetch and create/update/delete operations."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=PrettyJSONResponse,
        lifespan=lifespan,
    )
    app.state.store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → routes
    app.add_middleware(OptionalGZipMiddleware, minimum_size=settings.gzip_minimum_size)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # pages.router holds the catch-all GET and must stay last
    app.include_router(resources.router)
    app.include_router(health.router)
    app.include_router(pages.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
