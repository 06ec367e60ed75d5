"""Local SQLite database management for CLI cache."""

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from novelsync.cli.cache.models import CacheBase
from novelsync.cli.config import get_config_dir


def get_cache_db_path() -> Path:
    """Get path to the local cache database.

    Returns:
        Path to cache.db inside the config directory
    """
    return get_config_dir() / "cache.db"


def get_cache_engine() -> Engine:
    """Get SQLAlchemy engine for the cache database.

    Returns:
        SQLAlchemy Engine instance for cache.db
    """
    return create_engine(f"sqlite:///{get_cache_db_path()}", echo=False)


def init_cache_db() -> None:
    """Initialize the cache database.

    Creates all tables if they don't exist.
    """
    CacheBase.metadata.create_all(get_cache_engine())


def get_cache_session() -> Session:
    """Get a database session for the cache.

    Returns:
        SQLAlchemy Session instance for cache operations.
    """
    SessionLocal = sessionmaker(bind=get_cache_engine(), expire_on_commit=False)
    return SessionLocal()
