"""
HealthTracker — FastAPI Application Factory
=============================================

What:  Builds the API application: settings, database, store, status
       service, middleware, exception handlers and routes.
How:   create_app(settings) wires one concrete implementation of each
       service contract and stores it on app.state.
Who:   uvicorn (healthtracker.main:app), tests (create_app(test_settings)).

Lifecycle:
    Startup:
    1. Configure logging
    2. Create the weighins/runs tables if missing; failure aborts startup
    Shutdown:
    1. Dispose the database engine (close pooled connections)

Exception Handlers:
    ValidationError / RequestValidationError → 400
    StoreUnavailableError                    → 503
    DatabaseError, HealthTrackerError        → 500
    Exception (fallback)                     → 500
    Bodies never carry paths, SQL or driver messages.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from healthtracker import __version__
from healthtracker.config import Settings
from healthtracker.database import Database
from healthtracker.exceptions import (
    DatabaseError,
    HealthTrackerError,
    StoreUnavailableError,
    ValidationError,
)
from healthtracker.middleware.logging import RequestLoggingMiddleware
from healthtracker.middleware.request_id import RequestIDMiddleware, request_id_var
from healthtracker.middleware.timeout import TimeoutMiddleware
from healthtracker.routes import health, runs, weight
from healthtracker.services.health_service import HealthService
from healthtracker.services.sqlite_store import SQLiteRecordStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger once per process.

    Format: 2025-06-01T08:00:00 [INFO] healthtracker.access: POST /weight 201 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-statement and per-request chatter from libraries
    for noisy in ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "httpcore", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Initialize the schema before serving; dispose the engine afterwards.

    Startup is fatal when the tables cannot be created: the error is logged
    with the configured path and re-raised, so uvicorn exits instead of
    serving a permanently unhealthy API.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(settings)
    logger.info("HealthTracker API %s starting (database: %s)", __version__, settings.db_path)

    try:
        await database.initialize()
    except StoreUnavailableError:
        logger.critical(
            "Cannot open or create the database at %s. Check the path and permissions.",
            settings.db_path,
        )
        await database.dispose()
        raise

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("HealthTracker API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def _field_errors(exc: RequestValidationError) -> list:
    """Flatten Pydantic errors into [{"field": ..., "message": ...}]."""
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        fields.append({"field": ".".join(loc) or "body", "message": message})
    return fields


def register_exception_handlers(app: FastAPI) -> None:
    """Map application exceptions to status codes and the ErrorResponse envelope."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                exc.message,
                {"field": exc.field} if exc.field else None,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Shape errors (missing field, bad date, non-integer count) use the same 400 envelope."""
        fields = _field_errors(exc)
        first = fields[0] if fields else {"field": "body", "message": "Invalid request"}
        message = f"{first['field']}: {first['message']}"
        logger.warning("[%s] Request rejected: %s", request_id_var.get(""), message)
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                message,
                {"field": first["field"], "errors": fields},
            ),
        )

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        logger.error(
            "[%s] Store unavailable: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=503,
            content=_error_body("store_unavailable", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "server_error", "An internal error occurred. Please try again later."
            ),
        )

    @app.exception_handler(HealthTrackerError)
    async def handle_app_error(request: Request, exc: HealthTrackerError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            exc,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration. When omitted, Settings() is read
                  from the environment / .env file.

    Nothing here touches the database file; the first connection happens in
    the lifespan (or, under ASGITransport in tests, on the first request).
    """
    settings = settings or Settings()

    app = FastAPI(
        title="HealthTracker API",
        description="Log weigh-ins and runs; query recent records and aggregate status.",
        version=__version__,
        lifespan=lifespan,
    )

    database = Database(settings)
    store = SQLiteRecordStore(database)
    app.state.settings = settings
    app.state.database = database
    app.state.store = store
    app.state.status_service = HealthService(store, api_version=__version__)

    # Last added runs first: RequestID → Logging → Timeout → routes
    app.add_middleware(TimeoutMiddleware, timeout=settings.request_timeout)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(weight.router)
    app.include_router(runs.router)
    app.include_router(health.router)

    return app


# uvicorn healthtracker.main:app
app = create_app()
