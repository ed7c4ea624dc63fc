"""
FileRelay: FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (`python -m filerelay` or `uvicorn filerelay.main:app`).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────┐ ┌──────────────┐  │
    │  │   Req ID     │→│  Logging    │→│    CORS      │  │
    │  └──────────────┘ └─────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────────┐ ┌─────────────────────────┐ │
    │  │ POST /read-file    │ │ GET /health             │ │
    │  └────────────────────┘ └─────────────────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ MissingFile→400 │ Validation→400 │ Gen→500    │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (raise on missing API key → server exits)
    3. Log startup complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from filerelay import __version__
from filerelay.config import settings
from filerelay.exceptions import (
    FileRelayError,
    GenerationError,
    MissingFileError,
    ValidationError,
)
from filerelay.middleware.logging import RequestLoggingMiddleware
from filerelay.middleware.request_id import RequestIDMiddleware, request_id_var
from filerelay.routes import health, read_file

logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = "An error occurred while generating content"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container runtimes capture it)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and refuse to start without an API key.

    A ConfigurationError raised here aborts uvicorn's lifespan startup, so
    the process exits instead of serving requests that can only fail.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("FileRelay %s starting up...", __version__)

    try:
        settings.validate_required()
    except FileRelayError as e:
        logger.error("Configuration error: %s", e.message)
        raise

    logger.info("Using Gemini model: %s", settings.gemini_model)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("FileRelay shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and JSON bodies.

    Handler hierarchy:
        MissingFileError        → 400 {"error": "File is required"}
        ValidationError         → 400 {"error": <message>}
        RequestValidationError  → 400 (malformed `file` field)
        GenerationError         → 500 {"error": ..., "details": <underlying>}
        FileRelayError (base)   → 500 {"error": <message>}
        Exception (fallback)    → 500 {"error": ..., "details": str(exc)}
    """

    @app.exception_handler(MissingFileError)
    async def handle_missing_file(request: Request, exc: MissingFileError):
        rid = request_id_var.get("")
        logger.warning("[%s] Missing upload field: %s", rid, exc.field)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """A `file` field that is not a file counts as a missing file."""
        rid = request_id_var.get("")
        errors = exc.errors()
        logger.warning("[%s] Request validation failed: %s", rid, errors)
        if any("file" in error.get("loc", ()) for error in errors):
            return JSONResponse(status_code=400, content={"error": MissingFileError().message})
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(GenerationError)
    async def handle_generation_error(request: Request, exc: GenerationError):
        rid = request_id_var.get("")
        logger.error("[%s] Error generating content: %s | Context: %s", rid, exc.details, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": exc.message, "details": exc.details},
        )

    @app.exception_handler(FileRelayError)
    async def handle_relay_error(request: Request, exc: FileRelayError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Runs in Starlette's ServerErrorMiddleware, outside the other
        middleware: the response has no X-Request-ID header and the
        exception is re-raised to the server after the body is sent.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": GENERATION_ERROR_MESSAGE, "details": str(exc)},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="FileRelay API",
        description=(
            "Upload an image (JPEG, PNG) or PDF and receive a ten-point description "
            "generated by Google Gemini."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(read_file.router)
    app.include_router(health.router)

    return app


# uvicorn expects `filerelay.main:app` to be importable
app = create_app()
