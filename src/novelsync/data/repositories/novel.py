"""Repository for Novel model."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync.data.clock import Clock
from novelsync.data.models.novel import Novel
from novelsync.data.repositories.base import VersionedRepository


class NovelRepository(VersionedRepository[Novel]):
    """Repository for Novel model."""

    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        super().__init__(Novel, session, clock)

    async def list_by_user(self, user_id: str) -> list[Novel]:
        """List novels owned by a user, tombstones included."""
        result = await self.session.execute(
            select(Novel).where(Novel.user_id == user_id).order_by(Novel.id)
        )
        return list(result.scalars().all())
