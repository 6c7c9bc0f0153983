"""
FastAPI Application Entry Point

This module creates and configures the catalog application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Tests create the app once and swap the store dependency

2. Lifespan Events
   - startup: create missing tables (when enabled)
   - shutdown: dispose of the engine's connection pool

3. Exception Handlers
   - EntityNotFoundError -> 404 error page
   - Store errors (SQLAlchemyError) -> 500 error page, logged
   - Anything else -> 500 error page, logged with traceback
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from sqlalchemy.exc import SQLAlchemyError

from catalog import __version__
from catalog.config import get_settings
from catalog.database import create_tables, engine
from catalog.exceptions import EntityNotFoundError
from catalog.routers import (
    authors_router,
    bookinstances_router,
    books_router,
    genres_router,
    home_router,
)
from catalog.templating import render

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


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
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Catalog tables ready")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    await engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="Server-rendered catalog of authors, genres, books and book copies.",
        version=__version__,
        lifespan=lifespan,
        # HTML site: no interactive API docs
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        """Render the 404 page for an identifier with no document."""
        logger.info(f"{exc.kind} {exc.entity_id} not found")
        return render(
            request,
            "error.html",
            {"title": "Not Found", "message": str(exc), "status_code": 404},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        """
        Handle store failures.

        Logs the actual error while showing a generic page. Nothing is
        retried; the request ends here.
        """
        logger.error(f"Database error: {exc}")
        return render(
            request,
            "error.html",
            {
                "title": "Error",
                "message": "A database error occurred. Please try again later.",
                "status_code": 500,
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        In debug mode the exception text is shown on the page.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        message = str(exc) if settings.debug else "An internal error occurred."
        return render(
            request,
            "error.html",
            {"title": "Error", "message": message, "status_code": 500},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(home_router)
    app.include_router(authors_router)
    app.include_router(genres_router)
    app.include_router(books_router)
    app.include_router(bookinstances_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get("/health", tags=["Health"], summary="Health check")
    async def health_check() -> dict:
        """Used by load balancers and container probes."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn catalog.main:app
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
