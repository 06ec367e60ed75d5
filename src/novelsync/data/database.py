"""Database configuration and session management."""

import logging
import os
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)

# Database URL from environment or default to SQLite
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./novelsync.db")


def get_engine(database_url: str | None = None, **kwargs: Any) -> AsyncEngine:
    """
    Create and configure async database engine.

    Args:
        database_url: Database URL to connect to. Uses DATABASE_URL env var if not provided.
        **kwargs: Additional arguments passed to create_async_engine.

    Returns:
        Configured AsyncEngine instance.
    """
    url = database_url or os.getenv("DATABASE_URL", DATABASE_URL)

    # For SQLite, use NullPool to avoid threading issues
    if url.startswith("sqlite"):
        kwargs.setdefault("poolclass", NullPool)

    return create_async_engine(url, echo=False, **kwargs)


def _make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Global engine instance
engine = get_engine()

# Session factory
AsyncSessionLocal = _make_session_factory(engine)


def configure_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """
    Point the global engine and session factory at another database.

    Used by tests and by deployments that pick the URL after import.

    Args:
        database_url: Database URL to connect to.
        **kwargs: Additional arguments passed to create_async_engine.

    Returns:
        The new global AsyncEngine.
    """
    global engine, AsyncSessionLocal

    engine = get_engine(database_url, **kwargs)
    AsyncSessionLocal = _make_session_factory(engine)
    logger.info("Database engine configured for %s", engine.url.render_as_string())
    return engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession instance that is automatically closed after use.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db() -> None:
    """
    Initialize the database by creating all tables.

    This should be called on application startup.
    """
    from novelsync.data.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """
    Close database connections.

    This should be called on application shutdown.
    """
    await engine.dispose()
