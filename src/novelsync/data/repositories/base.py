"""Base repository implementing the versioned keyed store."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Generic, Protocol, TypeVar
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync.data.clock import Clock, SystemClock, ensure_utc
from novelsync.data.models.base import VersionedModel

ModelType = TypeVar("ModelType", bound=VersionedModel)
ModelType_co = TypeVar("ModelType_co", bound=VersionedModel, covariant=True)


class EntityStore(Protocol[ModelType_co]):
    """What the sync service needs from a per-type store."""

    async def upsert_all(self, records: Sequence[Mapping[str, Any]]) -> Sequence[ModelType_co]:
        ...

    async def find_updated_since(self, since: datetime) -> Sequence[ModelType_co]:
        ...


class VersionedRepository(Generic[ModelType]):
    """
    Generic keyed store for versioned records.

    The repository never commits: callers own the transaction so that
    several stores can be written atomically.

    Args:
        model: The SQLAlchemy model class to operate on.
        session: The async database session.
        clock: Time source for ``updated_at``. Defaults to the wall clock.
    """

    def __init__(
        self,
        model: type[ModelType],
        session: AsyncSession,
        clock: Clock | None = None,
    ) -> None:
        """Initialize repository with model, session and clock."""
        self.model = model
        self.session = session
        self.clock = clock or SystemClock()
        self._payload_columns = frozenset(model.payload_columns())

    async def upsert_all(self, records: Sequence[Mapping[str, Any]]) -> list[ModelType]:
        """
        Create or overwrite records by id.

        Existing rows are overwritten unconditionally. Incoming ``version``
        and ``updated_at`` values are ignored; the store assigns both.

        Args:
            records: Field mappings keyed by column name.

        Returns:
            The persisted instances, in input order.
        """
        stored = [await self._upsert(record) for record in records]
        await self.session.flush()
        return stored

    async def find_updated_since(self, since: datetime) -> list[ModelType]:
        """
        Get every record whose ``updated_at`` is at or after ``since``.

        Tombstoned records are included. Order is unspecified.

        Args:
            since: Inclusive lower bound.

        Returns:
            List of matching instances.
        """
        result = await self.session.execute(
            select(self.model).where(self.model.updated_at >= since)
        )
        return list(result.scalars().all())

    async def get_by_id(self, id_: str) -> ModelType | None:
        """
        Get a model instance by ID.

        Args:
            id_: The ID of the instance to retrieve.

        Returns:
            The model instance if found, None otherwise.
        """
        return await self.session.get(self.model, id_)

    async def get_all(
        self, limit: int | None = None, offset: int = 0, include_deleted: bool = True
    ) -> list[ModelType]:
        """
        Get all model instances.

        Args:
            limit: Maximum number of instances to return.
            offset: Number of instances to skip.
            include_deleted: Whether tombstoned records are returned.

        Returns:
            List of model instances.
        """
        query = select(self.model).order_by(self.model.id).offset(offset)
        if not include_deleted:
            query = query.where(self.model.deleted.is_(False))
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self) -> int:
        """
        Count the total number of model instances, tombstones included.

        Returns:
            The total count.
        """
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return int(result.scalar_one())

    def _prepare_new(self, instance: ModelType, now: datetime) -> None:
        """Hook for per-type defaults on first persist."""

    async def _upsert(self, record: Mapping[str, Any]) -> ModelType:
        payload = {key: value for key, value in record.items() if key in self._payload_columns}
        now = self.clock.now()
        record_id = record.get("id")

        existing = await self.session.get(self.model, record_id) if record_id else None
        if existing is None:
            instance = self.model(
                id=record_id or str(uuid4()),
                version=1,
                updated_at=now,
                **payload,
            )
            self._prepare_new(instance, now)
            self.session.add(instance)
            # Flush so a repeated id later in the batch finds this row
            await self.session.flush()
            return instance

        for key, value in payload.items():
            if key not in self.model.immutable_fields:
                setattr(existing, key, value)
        existing.version += 1
        # Monotonic updated_at wins: a backwards clock bumps version but keeps the timestamp
        existing.updated_at = max(now, ensure_utc(existing.updated_at))
        return existing
