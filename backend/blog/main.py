"""
Blog API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers, and
       attaches a lifespan that owns the document store connection.
Who:   uvicorn (`blog.main:app`) and the `blog-api` entrypoint in server.py.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │  Req ID  │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────┐ ┌───────────┐ ┌────────────┐  │
    │  │ /api/posts[/id]  │ │   GET /   │ │ GET /health│  │
    │  └──────────────────┘ └───────────┘ └────────────┘  │
    │                                                     │
    │  Exception Handlers (body is always {"message"}):   │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration
    3. Connect the document store (failure is fatal: the server aborts)
    Shutdown:
    1. Close the store client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog import __version__
from blog.config import Settings, settings
from blog.database import DocumentStore
from blog.exceptions import (
    BlogError,
    DatabaseError,
    NotFoundError,
    StoreConnectionError,
    ValidationError,
)
from blog.middleware.logging import RequestLoggingMiddleware
from blog.middleware.request_id import RequestIDMiddleware, request_id_var
from blog.routes import health, posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure process-wide logging once, at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Access lines come from RequestLoggingMiddleware instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connects the document store on startup and closes it on shutdown.

    Any configuration or connection failure is logged and re-raised as
    StoreConnectionError. Starlette reports it as a failed startup and
    uvicorn exits the process; there is no retry.
    """
    app_settings: Settings = app.state.settings

    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Blog API %s starting up...", __version__)

    try:
        app_settings.validate_required()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        raise StoreConnectionError(message=str(e)) from e

    store = DocumentStore(
        uri=app_settings.mongodb_uri,
        database_name=app_settings.mongodb_database,
        timeout_ms=app_settings.mongodb_timeout_ms,
    )
    try:
        await store.connect()
    except StoreConnectionError as e:
        logger.critical("Cannot start without the document store: %s", e.message)
        raise

    app.state.store = store
    logger.info("🚀 Server running on port %d", app_settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Blog API shutting down...")
    await store.close()
    app.state.store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes. Every body is `{"message": str}`.

        RequestValidationError  → 400 (malformed JSON or wrong field types)
        ValidationError         → 400
        NotFoundError           → 404
        DatabaseError           → 500
        BlogError (base)        → its status_code
        HTTPException           → its status_code (unknown route, 405, ...)
        Exception (fallback)    → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _describe_validation_errors(exc)
        logger.warning("[%s] Invalid request body: %s", request_id_var.get(""), message)
        return _message(400, message)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _message(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _message(404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _message(500, exc.message)

    @app.exception_handler(BlogError)
    async def handle_blog_error(request: Request, exc: BlogError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return _message(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return _message(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the module singleton.

    Returns:
        A FastAPI instance whose lifespan connects the document store.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Blog API",
        description="CRUD API for blog posts stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = None

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    origins = app_settings.cors_origins_list or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(posts.router)

    return app


app = create_app()
