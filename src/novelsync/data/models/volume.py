"""Volume model."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from novelsync.data.models.base import VersionedModel


class Volume(VersionedModel):
    """Ordered section of a novel."""

    __tablename__ = "volumes"

    # Parent references are not foreign keys: children may arrive before parents
    novel_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    order_index: Mapped[int | None] = mapped_column(nullable=True)
