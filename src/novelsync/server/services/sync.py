"""Sync service for handling client-server synchronization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync.data.clock import Clock, SystemClock, ensure_utc, from_cursor, to_cursor
from novelsync.data.models.base import VersionedModel
from novelsync.data.repositories import (
    ChapterRepository,
    EntityStore,
    IdeaRepository,
    NovelRepository,
    VolumeRepository,
)
from novelsync.server.errors import StoreFailure
from novelsync.server.schemas.sync import (
    ChapterItem,
    EntityType,
    IdeaItem,
    NovelItem,
    SyncData,
    SyncPullRequest,
    SyncPullResponse,
    SyncPushRequest,
    SyncPushResponse,
    SyncRecord,
    VolumeItem,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncChannel:
    """One entity type taking part in push and pull."""

    entity_type: EntityType
    field: str  # key in SyncChanges / SyncData
    store: EntityStore[VersionedModel]
    item_schema: type[SyncRecord]


class SyncService:
    """Service for handling sync operations.

    Conflicts are resolved by last-write-wins: every pushed record
    overwrites the stored one, whatever its version or timestamp.
    """

    # The retry of a lost create race takes the overwrite path
    max_push_attempts = 2

    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        """Initialize the sync service.

        Args:
            session: Database session
            clock: Time source for record timestamps and cursors
        """
        self.session = session
        self.clock = clock or SystemClock()
        self.channels: list[SyncChannel] = [
            SyncChannel(EntityType.NOVEL, "novels", NovelRepository(session, self.clock), NovelItem),
            SyncChannel(
                EntityType.VOLUME, "volumes", VolumeRepository(session, self.clock), VolumeItem
            ),
            SyncChannel(
                EntityType.CHAPTER, "chapters", ChapterRepository(session, self.clock), ChapterItem
            ),
            SyncChannel(EntityType.IDEA, "ideas", IdeaRepository(session, self.clock), IdeaItem),
        ]

    async def push(self, request: SyncPushRequest) -> SyncPushResponse:
        """Handle a push request from a client.

        All entity lists are applied in one transaction. The client's cursor
        is not consulted: records never pulled may be pushed.

        A concurrent push may create one of the batch's ids between our read
        and our insert. The batch is then rolled back and applied again, and
        the retry overwrites the row the other push created.

        Args:
            request: The push request with changed records

        Returns:
            SyncPushResponse with the number of records applied

        Raises:
            StoreFailure: If the store rejected any record; nothing was applied
        """
        logger.debug("Push received with client cursor %s", request.last_sync_cursor)
        processed_count = 0

        for attempt in range(1, self.max_push_attempts + 1):
            try:
                processed_count = await self._apply_changes(request)
                await self.session.commit()
                break
            except IntegrityError as e:
                await self.session.rollback()
                if attempt == self.max_push_attempts:
                    logger.error("Push rolled back after %d id conflicts: %s", attempt, e)
                    raise StoreFailure(
                        "Push could not be applied; no changes were stored"
                    ) from e
                logger.warning("Push lost a create race, retrying: %s", e.orig)
            except SQLAlchemyError as e:
                await self.session.rollback()
                logger.error("Push rolled back after store error: %s", e)
                raise StoreFailure("Push could not be applied; no changes were stored") from e

        logger.info("Push applied %d records", processed_count)
        return SyncPushResponse(success=True, processed_count=processed_count)

    async def _apply_changes(self, request: SyncPushRequest) -> int:
        processed_count = 0
        for channel in self.channels:
            items = getattr(request.changes, channel.field) or []
            if not items:
                continue
            await channel.store.upsert_all([item.model_dump() for item in items])
            processed_count += len(items)
        return processed_count

    async def pull(self, request: SyncPullRequest) -> SyncPullResponse:
        """Handle a pull request from a client.

        Each entity type is queried on its own, so a pull racing a push may
        see part of that push. The new cursor is taken after the reads: a
        write that lands between its type's query and the cursor capture is
        never delivered.

        Args:
            request: The pull request with the client's cursor

        Returns:
            SyncPullResponse with changed records and the next cursor

        Raises:
            StoreFailure: If a range query failed
        """
        since = from_cursor(request.last_sync_cursor)
        collected: dict[str, list[SyncRecord]] = {}

        try:
            for channel in self.channels:
                records = await channel.store.find_updated_since(since)
                collected[channel.field] = [self._to_item(channel, r) for r in records]
        except SQLAlchemyError as e:
            logger.error("Pull failed while reading changes: %s", e)
            raise StoreFailure("Changes could not be read") from e

        new_sync_cursor = to_cursor(self.clock.now())
        logger.info(
            "Pull since %s returned %d records, new cursor %d",
            request.last_sync_cursor or 0,
            sum(len(items) for items in collected.values()),
            new_sync_cursor,
        )
        return SyncPullResponse(new_sync_cursor=new_sync_cursor, data=SyncData(**collected))

    @staticmethod
    def _to_item(channel: SyncChannel, record: VersionedModel) -> SyncRecord:
        fields: dict[str, Any] = {
            key: ensure_utc(value) if isinstance(value, datetime) else value
            for key, value in record.to_dict().items()
        }
        return channel.item_schema.model_validate(fields)
