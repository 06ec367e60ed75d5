"""Novel model."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from novelsync.data.models.base import VersionedModel


class Novel(VersionedModel):
    """Top-level work owned by a user."""

    __tablename__ = "novels"

    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    word_count: Mapped[int] = mapped_column(default=0, nullable=False)
    formatting: Mapped[str] = mapped_column(
        Text, default="{}", nullable=False
    )  # JSON object as string, opaque to the sync layer
