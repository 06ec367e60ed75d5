"""Cache manager facade for CLI operations."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.orm import Session

from novelsync.cli.cache.database import get_cache_session, init_cache_db
from novelsync.cli.cache.models import CACHED_MODELS, CachedRecord
from novelsync.cli.cache.repositories import CacheRepository, SyncStateRepository
from novelsync.server.schemas.sync import EntityType, SyncData

logger = logging.getLogger(__name__)


class CacheManager:
    """Facade for all cache operations.

    Records local edits as dirty rows, hands them to the sync protocol,
    and applies pulled server state.
    """

    def __init__(self, session: Session | None = None):
        """Initialize the cache manager.

        Args:
            session: Session to use. If None, opens the on-disk cache database.
        """
        self._own_session = session is None
        if session is None:
            init_cache_db()
            session = get_cache_session()
        self.session = session
        self.repositories: dict[str, CacheRepository[Any]] = {
            key: CacheRepository(model, session) for key, model in CACHED_MODELS.items()
        }
        self.sync_state = SyncStateRepository(session)

    def close(self) -> None:
        """Close the session if this manager opened it."""
        if self._own_session:
            self.session.close()

    def repository(self, entity_type: EntityType) -> CacheRepository[Any]:
        """Return the repository holding records of an entity type."""
        for repository in self.repositories.values():
            if repository.model_class.entity_type == entity_type:
                return repository
        raise KeyError(entity_type)

    # Local edits
    def create(self, entity_type: EntityType, **fields: Any) -> CachedRecord:
        """Create a record locally and mark it for push.

        Args:
            entity_type: Type of record to create
            **fields: Column values; ``id`` is generated when omitted

        Returns:
            The new cached record
        """
        repository = self.repository(entity_type)
        record = repository.add(**fields)
        repository.touch(record)
        self.session.commit()
        return record

    def update(self, entity_type: EntityType, id_: str, **fields: Any) -> CachedRecord | None:
        """Change fields of a local record and mark it for push.

        Args:
            entity_type: Type of record to update
            id_: Record ID
            **fields: Column values to overwrite

        Returns:
            The updated record, or None if no record has that ID
        """
        repository = self.repository(entity_type)
        record = repository.get(id_)
        if record is None:
            return None

        for key, value in fields.items():
            if key in {"id", "version", "dirty", "last_synced"}:
                continue
            if hasattr(record, key):
                setattr(record, key, value)
        repository.touch(record)
        self.session.commit()
        return record

    def delete(self, entity_type: EntityType, id_: str) -> bool:
        """Tombstone a record so the deletion is pushed.

        Returns:
            True if the record existed, False otherwise
        """
        return self.update(entity_type, id_, deleted=True) is not None

    def get(self, entity_type: EntityType, id_: str) -> CachedRecord | None:
        """Get a cached record by ID, tombstones included."""
        return self.repository(entity_type).get(id_)

    def list_records(
        self, entity_type: EntityType, include_deleted: bool = False
    ) -> list[CachedRecord]:
        """List cached records of a type."""
        return self.repository(entity_type).get_all(include_deleted=include_deleted)

    # Sync support
    def get_all_dirty(self) -> dict[str, list[CachedRecord]]:
        """Get dirty records keyed by wire collection name."""
        return {key: repository.get_dirty() for key, repository in self.repositories.items()}

    def pending_count(self) -> int:
        """Count records waiting to be pushed."""
        return sum(repository.count_dirty() for repository in self.repositories.values())

    def clear_dirty(self, records: list[CachedRecord]) -> None:
        """Clear dirty flags on records the server accepted."""
        now = datetime.now(UTC)
        for record in records:
            record.dirty = False
            record.last_synced = now
        self.session.commit()

    def apply_pulled(self, data: SyncData, new_cursor: int) -> tuple[int, int]:
        """Apply pulled records and advance the cursor in one transaction.

        Records are upserted by ID, so repeated deliveries are harmless.
        Records still dirty locally keep their local state; the next push
        overwrites the server copy.

        Args:
            data: Records returned by the server
            new_cursor: Cursor to store once the records are applied

        Returns:
            Tuple of (records applied, records skipped because dirty)
        """
        applied = 0
        skipped = 0
        now = datetime.now(UTC)

        try:
            for key, repository in self.repositories.items():
                for item in getattr(data, key):
                    record = repository.get(item.id) if item.id else None
                    if record is not None and record.dirty:
                        logger.warning(
                            "Keeping local changes to %s %s over pulled version %s",
                            repository.model_class.entity_type.value,
                            item.id,
                            item.version,
                        )
                        skipped += 1
                        continue
                    if record is None:
                        record = repository.add(id=item.id)
                    record.apply_item(item)
                    repository.mark_synced(record, now)
                    applied += 1

            self.sync_state.set_cursor(new_cursor)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        return applied, skipped

    def get_cursor(self) -> int:
        """Return the stored sync cursor."""
        return self.sync_state.get_cursor()

    def set_cursor(self, cursor: int) -> None:
        """Store a sync cursor."""
        self.sync_state.set_cursor(cursor)
        self.session.commit()
