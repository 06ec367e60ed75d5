"""Repository pattern for cache operations."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from novelsync.cli.cache.models import CachedRecord, SyncState

# Type variable for cache entities
T = TypeVar("T", bound=CachedRecord)


class CacheRepository(Generic[T]):
    """Base repository for cached records with dirty tracking.

    Repositories share the manager's session and never commit; the
    manager decides transaction boundaries.
    """

    def __init__(self, model_class: type[T], session: Session):
        """Initialize the cache repository.

        Args:
            model_class: The SQLAlchemy model class for this repository
            session: Session shared with the other repositories
        """
        self.model_class = model_class
        self.session = session

    def get(self, id_: str) -> T | None:
        """Get a cached record by ID."""
        return self.session.get(self.model_class, id_)

    def get_all(self, include_deleted: bool = False) -> list[T]:
        """Get cached records.

        Args:
            include_deleted: Whether tombstoned records are returned

        Returns:
            List of cached records ordered by ID
        """
        stmt = select(self.model_class).order_by(self.model_class.id)
        if not include_deleted:
            stmt = stmt.where(self.model_class.deleted.is_(False))
        return list(self.session.execute(stmt).scalars().all())

    def get_dirty(self) -> list[T]:
        """Get all dirty (locally modified) records, tombstones included."""
        stmt = select(self.model_class).where(self.model_class.dirty.is_(True))
        return list(self.session.execute(stmt).scalars().all())

    def count_dirty(self) -> int:
        """Count dirty records."""
        stmt = (
            select(func.count())
            .select_from(self.model_class)
            .where(self.model_class.dirty.is_(True))
        )
        return int(self.session.execute(stmt).scalar_one())

    def add(self, **fields: Any) -> T:
        """Stage a new locally created record."""
        record = self.model_class(**fields)
        self.session.add(record)
        return record

    def touch(self, record: T) -> None:
        """Mark a record as locally modified."""
        record.dirty = True
        record.updated_at = datetime.now(UTC)

    def mark_synced(self, record: T, when: datetime) -> None:
        """Clear the dirty flag after a successful exchange with the server."""
        record.dirty = False
        record.last_synced = when


class SyncStateRepository:
    """Repository for the persisted sync cursor."""

    def __init__(self, session: Session):
        self.session = session

    def get_cursor(self) -> int:
        """Return the stored cursor, 0 when the client never pulled."""
        state = self.session.get(SyncState, SyncState.GLOBAL)
        return state.cursor if state else 0

    def set_cursor(self, cursor: int) -> None:
        """Stage a new cursor value."""
        state = self.session.get(SyncState, SyncState.GLOBAL)
        if state is None:
            state = SyncState(id=SyncState.GLOBAL, cursor=cursor)
            self.session.add(state)
        else:
            state.cursor = cursor
