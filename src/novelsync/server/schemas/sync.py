"""Schemas for sync API.

Wire names are camelCase; the Python attributes stay snake_case and either
form is accepted on input.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntityType(str, Enum):
    """Types of entities that can be synced."""

    NOVEL = "novel"
    VOLUME = "volume"
    CHAPTER = "chapter"
    IDEA = "idea"


class WireModel(BaseModel):
    """Base for schemas exchanged with clients."""

    model_config = ConfigDict(populate_by_name=True)


# Record schemas


class SyncRecord(WireModel):
    """Fields shared by every synced record."""

    id: str | None = Field(
        None, max_length=64, description="Record ID; generated by the server when omitted"
    )
    version: int | None = Field(
        None, description="Server version counter; ignored on push"
    )
    updated_at: datetime | None = Field(
        None, alias="updatedAt", description="Server modification time; ignored on push"
    )
    deleted: bool = Field(False, description="Soft-delete flag")


class NovelItem(SyncRecord):
    """A novel as exchanged on push and pull."""

    user_id: str | None = Field(None, alias="userId", description="Owning user ID")
    title: str | None = Field(None, description="Novel title")
    description: str | None = Field(None, description="Novel description")
    cover_url: str | None = Field(None, alias="coverUrl", description="Cover image URL")
    word_count: int = Field(0, alias="wordCount", description="Word count")
    formatting: str = Field("{}", description="Opaque formatting JSON")


class VolumeItem(SyncRecord):
    """A volume as exchanged on push and pull."""

    novel_id: str | None = Field(None, alias="novelId", description="Parent novel ID")
    title: str | None = Field(None, description="Volume title")
    order_index: int | None = Field(None, alias="orderIndex", description="Position in novel")


class ChapterItem(SyncRecord):
    """A chapter as exchanged on push and pull."""

    volume_id: str | None = Field(None, alias="volumeId", description="Parent volume ID")
    title: str | None = Field(None, description="Chapter title")
    content: str | None = Field(None, description="Chapter text")
    word_count: int | None = Field(None, alias="wordCount", description="Word count")
    order_index: int | None = Field(None, alias="orderIndex", description="Position in volume")


class IdeaItem(SyncRecord):
    """An idea note as exchanged on push and pull."""

    novel_id: str = Field(..., alias="novelId", description="Parent novel ID")
    chapter_id: str | None = Field(None, alias="chapterId", description="Anchoring chapter ID")
    content: str = Field(..., description="Note text")
    quote: str | None = Field(None, description="Quoted passage")
    cursor: str | None = Field(None, description="Editor anchor position")
    is_starred: bool = Field(False, alias="isStarred", description="Starred flag")
    created_at: datetime | None = Field(
        None, alias="createdAt", description="Creation time; fixed after first persist"
    )


# Push schemas


class SyncChanges(WireModel):
    """Entity-type-partitioned batch of pushed records."""

    novels: list[NovelItem] | None = Field(None, description="Changed novels")
    volumes: list[VolumeItem] | None = Field(None, description="Changed volumes")
    chapters: list[ChapterItem] | None = Field(None, description="Changed chapters")
    ideas: list[IdeaItem] | None = Field(None, description="Changed ideas")


class SyncPushRequest(WireModel):
    """Request to push local changes to the server."""

    last_sync_cursor: int | None = Field(
        None,
        alias="lastSyncCursor",
        ge=0,
        description="Client cursor; accepted but not used to gate the push",
    )
    changes: SyncChanges = Field(..., description="Records to upsert")


class SyncPushResponse(WireModel):
    """Response after pushing local changes."""

    success: bool = Field(..., description="Whether push succeeded")
    processed_count: int = Field(
        0, alias="processedCount", description="Number of records applied"
    )


# Pull schemas


class SyncPullRequest(WireModel):
    """Request to pull server changes."""

    last_sync_cursor: int | None = Field(
        None,
        alias="lastSyncCursor",
        ge=0,
        description="Epoch milliseconds to get changes since (null or 0 = full sync)",
    )


class SyncData(WireModel):
    """Records changed since the requested cursor."""

    novels: list[NovelItem] = Field(default_factory=list, description="Changed novels")
    volumes: list[VolumeItem] = Field(default_factory=list, description="Changed volumes")
    chapters: list[ChapterItem] = Field(default_factory=list, description="Changed chapters")
    ideas: list[IdeaItem] = Field(default_factory=list, description="Changed ideas")


class SyncPullResponse(WireModel):
    """Response with server changes to pull."""

    new_sync_cursor: int = Field(
        ..., alias="newSyncCursor", description="Server time captured after the reads"
    )
    data: SyncData = Field(default_factory=SyncData, description="Changed records")
