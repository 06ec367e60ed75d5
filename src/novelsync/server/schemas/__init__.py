"""Pydantic schemas for API request/response validation."""

from novelsync.server.schemas.common import ErrorResponse, HealthResponse
from novelsync.server.schemas.sync import (
    ChapterItem,
    EntityType,
    IdeaItem,
    NovelItem,
    SyncChanges,
    SyncData,
    SyncPullRequest,
    SyncPullResponse,
    SyncPushRequest,
    SyncPushResponse,
    SyncRecord,
    VolumeItem,
)

__all__ = [
    "ChapterItem",
    "EntityType",
    "ErrorResponse",
    "HealthResponse",
    "IdeaItem",
    "NovelItem",
    "SyncChanges",
    "SyncData",
    "SyncPullRequest",
    "SyncPullResponse",
    "SyncPushRequest",
    "SyncPushResponse",
    "SyncRecord",
    "VolumeItem",
]
