"""Idea note model."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from novelsync.data.models.base import VersionedModel


class Idea(VersionedModel):
    """Free-text note attached to a novel and optionally a chapter."""

    __tablename__ = "ideas"

    immutable_fields: ClassVar[frozenset[str]] = frozenset({"created_at"})

    novel_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    chapter_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    quote: Mapped[str | None] = mapped_column(Text, nullable=True)
    cursor: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )  # Editor anchor, stored verbatim
    is_starred: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
