"""Sync API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync.data.clock import Clock, get_clock
from novelsync.data.database import get_session
from novelsync.server.schemas.sync import (
    SyncPullRequest,
    SyncPullResponse,
    SyncPushRequest,
    SyncPushResponse,
)
from novelsync.server.services.sync import SyncService

router = APIRouter()


@router.post("/api/sync/push", response_model=SyncPushResponse)
async def sync_push(
    request: SyncPushRequest,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> SyncPushResponse:
    """Push local changes to the server.

    Applies every record in the batch atomically, overwriting stored
    records with the same ID (last-write-wins).
    """
    service = SyncService(session, clock)
    return await service.push(request)


@router.post("/api/sync/pull", response_model=SyncPullResponse)
async def sync_pull(
    request: SyncPullRequest,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> SyncPullResponse:
    """Pull server changes to the client.

    Returns all records updated at or after the provided cursor,
    or all records if no cursor is provided.
    """
    service = SyncService(session, clock)
    return await service.pull(request)
