"""Local cache models for offline CLI operation."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar
from uuid import uuid4

from sqlalchemy import BigInteger, DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from novelsync.server.schemas.sync import (
    ChapterItem,
    EntityType,
    IdeaItem,
    NovelItem,
    SyncRecord,
    VolumeItem,
)


class CacheBase(DeclarativeBase):
    """Base class for all cache SQLAlchemy models."""

    # Type annotation map for common types
    type_annotation_map: ClassVar[dict[type, Any]] = {
        datetime: DateTime(timezone=True),
    }


class SyncMixin:
    """Mixin that adds record identity and sync metadata columns.

    ``version`` mirrors the last value the server reported; the server
    ignores it on push.
    """

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: str(uuid4())
    )
    version: Mapped[int] = mapped_column(default=1, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    deleted: Mapped[bool] = mapped_column(default=False, nullable=False)
    dirty: Mapped[bool] = mapped_column(default=False, nullable=False)
    last_synced: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )


class CachedRecord(CacheBase, SyncMixin):
    """Abstract cached record convertible to and from wire items."""

    __abstract__ = True

    entity_type: ClassVar[EntityType]
    item_schema: ClassVar[type[SyncRecord]]

    # Local bookkeeping never sent to the server
    local_fields: ClassVar[frozenset[str]] = frozenset({"dirty", "last_synced"})

    def to_item(self) -> SyncRecord:
        """Build the wire item for this record."""
        fields = {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
            if column.name not in self.local_fields
        }
        return self.item_schema.model_validate(fields)

    def apply_item(self, item: SyncRecord) -> None:
        """Overwrite columns with the values of a pulled item."""
        values = item.model_dump()
        for column in self.__table__.columns:
            if column.name not in values:
                continue
            value = values[column.name]
            if value is None and not column.nullable:
                continue
            setattr(self, column.name, value)


class CachedNovel(CachedRecord):
    """Cached novel."""

    __tablename__ = "cached_novels"

    entity_type: ClassVar[EntityType] = EntityType.NOVEL
    item_schema: ClassVar[type[SyncRecord]] = NovelItem

    # Mirror Novel model fields
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    word_count: Mapped[int] = mapped_column(default=0, nullable=False)
    formatting: Mapped[str] = mapped_column(Text, default="{}", nullable=False)


class CachedVolume(CachedRecord):
    """Cached volume."""

    __tablename__ = "cached_volumes"

    entity_type: ClassVar[EntityType] = EntityType.VOLUME
    item_schema: ClassVar[type[SyncRecord]] = VolumeItem

    novel_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    order_index: Mapped[int | None] = mapped_column(nullable=True)


class CachedChapter(CachedRecord):
    """Cached chapter."""

    __tablename__ = "cached_chapters"

    entity_type: ClassVar[EntityType] = EntityType.CHAPTER
    item_schema: ClassVar[type[SyncRecord]] = ChapterItem

    volume_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    word_count: Mapped[int | None] = mapped_column(nullable=True)
    order_index: Mapped[int | None] = mapped_column(nullable=True)


class CachedIdea(CachedRecord):
    """Cached idea note."""

    __tablename__ = "cached_ideas"

    entity_type: ClassVar[EntityType] = EntityType.IDEA
    item_schema: ClassVar[type[SyncRecord]] = IdeaItem

    novel_id: Mapped[str] = mapped_column(String(64), nullable=False)
    chapter_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    quote: Mapped[str | None] = mapped_column(Text, nullable=True)
    cursor: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_starred: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class SyncState(CacheBase):
    """Persisted sync cursor."""

    __tablename__ = "sync_state"

    GLOBAL: ClassVar[str] = "global"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    cursor: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# Collection key on the wire for each cached model, in push/pull order
CACHED_MODELS: dict[str, type[CachedRecord]] = {
    "novels": CachedNovel,
    "volumes": CachedVolume,
    "chapters": CachedChapter,
    "ideas": CachedIdea,
}
