"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Gateways are built once here and kept on app.state
   - Tests can pass their own gateways or override the dependencies

2. Lifespan Events
   - startup/shutdown logging and engine disposal

3. Middleware Stack
   - CORS: Allow cross-origin requests

4. Exception Handlers
   - Every error leaves as the standard envelope
   - Internal details are logged, never sent to clients
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.database import SessionLocal, engine
from app.exceptions import BookAPIError, ValidationFailed
from app.routers import books_router, specs_router
from app.services.book_store import BookStore, SQLAlchemyBookStore
from app.services.bulk_reset import BulkReset, StoredProcedureBulkReset
from app.services.validation import violations_from_errors
from app.utils.responses import error_response, failure_response

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

INTERNAL_ERROR = "internal server error"
BAD_ROUTE = "bad route"


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"API version: {settings.api_version}")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Exception Handlers
# =============================================================================
async def book_api_error_handler(request: Request, exc: BookAPIError) -> JSONResponse:
    """Domain errors already carry their status code and message."""
    return error_response(exc)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Bodies FastAPI could not decode (e.g. malformed JSON) get the 422 envelope."""
    violations = violations_from_errors(exc.errors(), skip_prefix=("body",))
    return error_response(ValidationFailed(violations))


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Unknown paths and methods are reported as a bad route."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return failure_response(status.HTTP_404_NOT_FOUND, BAD_ROUTE)
    return failure_response(exc.status_code, str(exc.detail))


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError,
) -> JSONResponse:
    """Database errors that escaped the gateways."""
    logger.error(f"Database error: {exc}")
    return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all exception handler.

    The client only ever sees the generic message, in every environment.
    """
    logger.error(f"Unhandled error: {exc}", exc_info=True)
    return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    book_store: BookStore | None = None,
    bulk_reset: BulkReset | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        book_store: Book store gateway; defaults to SQLAlchemy on SessionLocal
        bulk_reset: Bulk reset gateway; defaults to the stored procedure

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Books API

A single resource for managing books.

- **List**: filter by title, author and description, paginate with take/page
- **Detail, create, update, delete**: by `id` query parameter
- **Delete all**: `DELETE ?delete=all`

Every response uses the same envelope: `status`, `message`, `data`,
plus `meta` on lists and `error` on validation failures.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Gateways
    # -------------------------------------------------------------------------
    # Built once per process and shared by all requests
    app.state.book_store = book_store or SQLAlchemyBookStore(SessionLocal)
    app.state.bulk_reset = bulk_reset or StoredProcedureBulkReset(
        SessionLocal,
        procedure=settings.bulk_reset_procedure,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    app.add_exception_handler(BookAPIError, book_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    api_prefix = f"/api/{settings.api_version}"

    app.include_router(books_router, prefix=api_prefix)
    app.include_router(specs_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the database is reachable.",
    )
    def health_check() -> dict:
        """Used by load balancers and container probes."""
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            database_ok = True
        except SQLAlchemyError as exc:
            logger.warning(f"Health check could not reach the database: {exc}")
            database_ok = False

        return {
            "status": "healthy" if database_ok else "degraded",
            "app": settings.app_name,
            "version": settings.api_version,
            "database": {"reachable": database_ok},
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "books": f"{api_prefix}/books",
            "docs": "/docs",
            "specs": "/api/specs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn app.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m app.main
# In production: uvicorn app.main:app --host 0.0.0.0 --port 8001

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
