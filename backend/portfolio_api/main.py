"""
Portfolio Backend: FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn portfolio_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌────────┐  │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│  CORS  │  │
    │  └──────────┘ └─────────────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────┐ ┌──────────────┐ ┌────────────┐ │
    │  │ POST /contacts│ │ /auth/status │ │ GET /health│ │
    │  └───────────────┘ └──────────────┘ └────────────┘ │
    │                                                     │
    │  Static site (STATIC_DIR) mounted at "/" last       │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, report configuration problems
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from portfolio_api import __version__
from portfolio_api.config import settings
from portfolio_api.database import dispose_engine
from portfolio_api.middleware.logging import RequestLoggingMiddleware
from portfolio_api.middleware.request_id import RequestIDMiddleware, request_id_var
from portfolio_api.routes import contact, health, status
from portfolio_api.schemas.submission import ErrorResponse, SubmissionOutcome, SubmissionResult

logger = logging.getLogger(__name__)

INVALID_PAYLOAD_MESSAGE = "Invalid submission payload"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure process-wide logging.

    What:    Root logger to stdout with a timestamped, leveled format.
    When:    Called once during app startup, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] portfolio_api.services...: message
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every connection and request at INFO/DEBUG
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
    Manage application lifecycle: startup and shutdown procedures.

    A missing email configuration is logged, not fatal: the contact form
    keeps storing submissions while notifications are unavailable.
    """
    setup_logging()
    logger.info("Portfolio backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    static_root = Path(settings.static_dir)
    if static_root.is_dir():
        logger.info("Serving static site from %s", static_root.resolve())
    else:
        logger.info("No static site at %s; serving API only", static_root.resolve())

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Portfolio backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Handler hierarchy:
        RequestValidationError → 201 with a failed SubmissionResult body
                                 (the only body-parsing route is /contacts)
        Exception (fallback)   → 500 generic error, stack trace logged only

    Workflow errors never reach here: SubmissionWorkflow.submit() turns
    every failure into a result.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body was not a JSON object of strings; same shape as a rejected form."""
        rid = request_id_var.get("")
        # Locations only; the offending values may be personal data
        locations = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
        logger.info("[%s] Malformed request body on %s: %s", rid, request.url.path, locations)
        result = SubmissionResult(
            success=False,
            message=INVALID_PAYLOAD_MESSAGE,
            outcome=SubmissionOutcome.REJECTED,
        )
        return JSONResponse(status_code=201, content=result.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Security: Stack trace is logged server-side ONLY (never in response).
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="internal_server_error",
                message="An unexpected error occurred. Please try again later.",
                request_id=rid,
            ).model_dump(),
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
        title="Portfolio API",
        description="Contact form backend for the portfolio site.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: last added runs first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
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
    app.include_router(contact.router)
    app.include_router(status.router)
    app.include_router(health.router)

    # The static mount catches everything under "/", so it goes last
    static_root = Path(settings.static_dir)
    if static_root.is_dir():
        app.mount("/", StaticFiles(directory=static_root, html=True), name="site")

    return app


app = create_app()
