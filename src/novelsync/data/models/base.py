"""Base models and mixins for SQLAlchemy ORM."""

from datetime import datetime
from typing import Any, ClassVar

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    # Type annotation map for common types
    type_annotation_map: ClassVar[dict[type, Any]] = {
        datetime: DateTime(timezone=True),
    }


class VersionedMixin:
    """Mixin that adds the columns every syncable record shares.

    ``version`` and ``updated_at`` are owned by the store: repositories set
    them on every upsert and ignore whatever the caller sent.
    """

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    version: Mapped[int] = mapped_column(default=1, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    deleted: Mapped[bool] = mapped_column(default=False, nullable=False)


class VersionedModel(Base, VersionedMixin):
    """
    Base model for records that take part in push/pull synchronization.

    This is an abstract base that should be inherited by concrete models.
    """

    __abstract__ = True

    # Columns maintained by the store rather than copied from pushed payloads
    store_managed_fields: ClassVar[frozenset[str]] = frozenset({"id", "version", "updated_at"})

    # Columns written on creation only
    immutable_fields: ClassVar[frozenset[str]] = frozenset()

    @classmethod
    def payload_columns(cls) -> list[str]:
        """Return the column names a pushed record may overwrite."""
        return [
            column.name
            for column in cls.__table__.columns
            if column.name not in cls.store_managed_fields
        ]

    def to_dict(self) -> dict[str, Any]:
        """
        Convert model instance to dictionary.

        Returns:
            Dictionary representation of the model.
        """
        return {
            column.name: getattr(self, column.name) for column in self.__table__.columns
        }

    def __repr__(self) -> str:
        """Return string representation of the model."""
        attrs = ", ".join(
            f"{column.name}={getattr(self, column.name)!r}"
            for column in self.__table__.columns
        )
        return f"{self.__class__.__name__}({attrs})"
