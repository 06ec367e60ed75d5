"""Sync protocol for CLI-server synchronization.

Implements cursor-based delta sync: dirty local records are pushed, then
everything the server changed since the stored cursor is pulled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from novelsync.cli.cache.manager import CacheManager
from novelsync.cli.cache.models import CachedRecord
from novelsync.cli.client import create_client, is_online
from novelsync.server.schemas.sync import SyncPullResponse, SyncPushResponse

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Result of a sync operation."""

    success: bool
    pushed: int = 0
    pulled: int = 0
    skipped: int = 0
    cursor: int | None = None
    error_message: str | None = None


class SyncClient:
    """HTTP client for sync operations."""

    def __init__(self) -> None:
        """Initialize the sync client."""
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> SyncClient:
        """Enter async context manager."""
        self._client = create_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def push(self, data: dict[str, Any]) -> dict[str, Any]:
        """Push changed records to the server.

        Args:
            data: The push request body

        Returns:
            The push response from the server

        Raises:
            httpx.HTTPError: If the request fails
        """
        if not self._client:
            raise RuntimeError("SyncClient not initialized - use as context manager")

        response = await self._client.post("/api/sync/push", json=data)
        response.raise_for_status()
        return response.json()  # type: ignore[no-any-return]

    async def pull(self, last_sync_cursor: int | None = None) -> dict[str, Any]:
        """Pull changes from the server.

        Args:
            last_sync_cursor: Cursor to get changes since (None = full sync)

        Returns:
            The pull response from the server

        Raises:
            httpx.HTTPError: If the request fails
        """
        if not self._client:
            raise RuntimeError("SyncClient not initialized - use as context manager")

        response = await self._client.post(
            "/api/sync/pull", json={"lastSyncCursor": last_sync_cursor}
        )
        response.raise_for_status()
        return response.json()  # type: ignore[no-any-return]


class SyncProtocol:
    """Synchronization protocol between the local cache and the server."""

    def __init__(self, cache_manager: CacheManager | None = None) -> None:
        """Initialize the sync protocol.

        Args:
            cache_manager: Cache manager to use. If None, creates a new one.
        """
        self._cache = cache_manager or CacheManager()
        self._own_cache = cache_manager is None

    def close(self) -> None:
        """Close resources."""
        if self._own_cache:
            self._cache.close()

    async def sync(self) -> SyncResult:
        """Perform a full sync (push then pull).

        Returns:
            SyncResult with success status and counts
        """
        if not await is_online():
            return SyncResult(success=False, error_message="Server is not reachable")

        push_result = await self.push()
        if not push_result.success:
            return push_result

        pull_result = await self.pull()
        return SyncResult(
            success=pull_result.success,
            pushed=push_result.pushed,
            pulled=pull_result.pulled,
            skipped=pull_result.skipped,
            cursor=pull_result.cursor,
            error_message=pull_result.error_message,
        )

    async def push(self) -> SyncResult:
        """Push local dirty records to the server.

        Dirty flags are cleared only after the server confirms the batch.

        Returns:
            SyncResult with success status and the server's processed count
        """
        if not await is_online():
            return SyncResult(success=False, error_message="Server is not reachable")

        dirty = self._cache.get_all_dirty()
        records: list[CachedRecord] = [record for group in dirty.values() for record in group]
        if not records:
            return SyncResult(success=True, pushed=0)

        push_data = self._build_push_request(dirty, self._cache.get_cursor())

        try:
            async with SyncClient() as client:
                response = SyncPushResponse.model_validate(await client.push(push_data))
        except (httpx.HTTPError, ValidationError) as e:
            logger.error("Push failed: %s", e)
            return SyncResult(success=False, error_message=str(e))

        if not response.success:
            return SyncResult(success=False, error_message="Server rejected the push")

        self._cache.clear_dirty(records)
        logger.info("Pushed %d records", response.processed_count)
        return SyncResult(success=True, pushed=response.processed_count)

    async def pull(self) -> SyncResult:
        """Pull changes from the server into the cache.

        The stored cursor advances in the transaction that applies the
        records; a failed request leaves it untouched.

        Returns:
            SyncResult with success status and counts
        """
        if not await is_online():
            return SyncResult(success=False, error_message="Server is not reachable")

        cursor = self._cache.get_cursor()
        try:
            async with SyncClient() as client:
                response = SyncPullResponse.model_validate(await client.pull(cursor))
        except (httpx.HTTPError, ValidationError) as e:
            logger.error("Pull from cursor %d failed: %s", cursor, e)
            return SyncResult(success=False, error_message=str(e))

        applied, skipped = self._cache.apply_pulled(response.data, response.new_sync_cursor)
        logger.info(
            "Pulled %d records (%d kept local), cursor %d -> %d",
            applied,
            skipped,
            cursor,
            response.new_sync_cursor,
        )
        return SyncResult(
            success=True,
            pulled=applied,
            skipped=skipped,
            cursor=response.new_sync_cursor,
        )

    @staticmethod
    def _build_push_request(
        dirty: dict[str, list[CachedRecord]], cursor: int
    ) -> dict[str, Any]:
        """Build the push request body.

        Args:
            dirty: Dirty records keyed by wire collection name
            cursor: The client's last sync cursor

        Returns:
            Dict ready to send as JSON
        """
        return {
            "lastSyncCursor": cursor,
            "changes": {
                key: [record.to_item().model_dump(mode="json", by_alias=True) for record in group]
                for key, group in dirty.items()
                if group
            },
        }
