"""
Exercise API Backend: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       lifespan() owns the database engine.
Who:   uvicorn (`uvicorn exercise_api.main:app`, or `python -m exercise_api`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Access Logging │→│     CORS     │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────┐ ┌─────────────────┐  │
    │  │ /exercises, /exercises/id │ │ GET /health     │  │
    │  └───────────────────────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Store→per op │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → database manager on app.state.db → optional schema
    Shutdown: dispose engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from exercise_api import __version__
from exercise_api.config import settings
from exercise_api.database import DatabaseSessionManager
from exercise_api.exceptions import (
    INVALID_REQUEST,
    REQUEST_FAILED,
    ExerciseApiError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from exercise_api.middleware.logging import RequestLoggingMiddleware
from exercise_api.middleware.request_id import RequestIDMiddleware, request_id_var
from exercise_api.routes import exercises, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] exercise_api.access: GET /exercises 200 ...
    Called once at startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn.access duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def error_body(message: str) -> dict:
    return {"Error": message}


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Create the database manager on startup and dispose it on shutdown.

    A manager already present on app.state.db (tests) is used as-is and
    left for its owner to dispose.
    """
    setup_logging()
    logger.info("Exercise API %s starting up...", __version__)

    owns_db = getattr(app.state, "db", None) is None
    if owns_db:
        app.state.db = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    if settings.db_create_schema:
        await app.state.db.create_schema()
        logger.info("Database schema ensured")

    logger.info("Server listening on port %d...", settings.port)

    yield

    logger.info("Exercise API shutting down...")
    if owns_db:
        await app.state.db.dispose()
        app.state.db = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to `{"Error": ...}` responses.

    Handler hierarchy:
        ValidationError          → 400 Invalid request
        RequestValidationError   → 400 Invalid request (framework-level)
        NotFoundError            → 404 Not found
        StoreError               → status/message set by the operation
        ExerciseApiError (base)  → exc.status_code / exc.public_message
        Exception (fallback)     → 500 Request failed

    Context dicts and exception text are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.public_message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation error: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content=error_body(INVALID_REQUEST))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] %s", rid, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.public_message))

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.public_message))

    @app.exception_handler(ExerciseApiError)
    async def handle_app_error(request: Request, exc: ExerciseApiError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.public_message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content=error_body(REQUEST_FAILED))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call, so tests can build isolated apps
    and override dependencies without touching the module-level `app`.
    """
    app = FastAPI(
        title="Exercise Tracker API",
        description="Log exercises (name, reps, weight, unit, date) and manage them over REST.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(exercises.router)
    app.include_router(health.router)

    return app


app = create_app()
