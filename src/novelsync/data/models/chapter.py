"""Chapter model."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from novelsync.data.models.base import VersionedModel


class Chapter(VersionedModel):
    """Chapter text within a volume."""

    __tablename__ = "chapters"

    volume_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    word_count: Mapped[int | None] = mapped_column(nullable=True)
    order_index: Mapped[int | None] = mapped_column(nullable=True)
