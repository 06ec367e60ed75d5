"""Repository for Volume model."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync.data.clock import Clock
from novelsync.data.models.volume import Volume
from novelsync.data.repositories.base import VersionedRepository


class VolumeRepository(VersionedRepository[Volume]):
    """Repository for Volume model."""

    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        super().__init__(Volume, session, clock)

    async def list_by_novel(self, novel_id: str) -> list[Volume]:
        """List volumes of a novel in reading order."""
        result = await self.session.execute(
            select(Volume)
            .where(Volume.novel_id == novel_id)
            .order_by(Volume.order_index, Volume.id)
        )
        return list(result.scalars().all())
