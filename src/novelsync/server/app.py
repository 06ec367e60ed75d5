"""FastAPI application factory and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from novelsync import __version__
from novelsync.data.database import close_db, init_db
from novelsync.server.errors import StoreFailure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Handle application startup and shutdown events.

    On startup: Create tables if they do not exist.
    On shutdown: Close database connections.
    """
    # Startup
    await init_db()
    logger.info("Novelsync server %s started", __version__)

    yield
    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application instance.

    Returns:
        Configured FastAPI application ready to serve requests.
    """
    app = FastAPI(
        title="Novelsync",
        description="Cursor-based push/pull synchronization for novel-writing clients",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Allow all origins in development, should be configured for production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register global exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Reject malformed requests before any store access."""
        return JSONResponse(
            status_code=422,
            content={
                "error": "Validation Error",
                "message": "Request validation failed",
                "details": exc.errors(),
            },
        )

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(_request: Request, exc: StoreFailure) -> JSONResponse:
        """Report store faults without partial results."""
        return JSONResponse(
            status_code=503,
            content={
                "error": "Store Failure",
                "message": str(exc),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
        """Handle general exceptions with consistent JSON response."""
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": str(exc),
            },
        )

    from novelsync.server.api import api_router

    app.include_router(api_router)

    return app
