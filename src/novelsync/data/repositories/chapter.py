"""Repository for Chapter model."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync.data.clock import Clock
from novelsync.data.models.chapter import Chapter
from novelsync.data.repositories.base import VersionedRepository


class ChapterRepository(VersionedRepository[Chapter]):
    """Repository for Chapter model."""

    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        super().__init__(Chapter, session, clock)

    async def list_by_volume(self, volume_id: str) -> list[Chapter]:
        """List chapters of a volume in reading order."""
        result = await self.session.execute(
            select(Chapter)
            .where(Chapter.volume_id == volume_id)
            .order_by(Chapter.order_index, Chapter.id)
        )
        return list(result.scalars().all())
