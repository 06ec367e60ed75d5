"""Repository for Idea model."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync.data.clock import Clock
from novelsync.data.models.idea import Idea
from novelsync.data.repositories.base import VersionedRepository


class IdeaRepository(VersionedRepository[Idea]):
    """Repository for Idea model."""

    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        super().__init__(Idea, session, clock)

    def _prepare_new(self, instance: Idea, now: datetime) -> None:
        if instance.created_at is None:
            instance.created_at = now

    async def list_by_novel(self, novel_id: str, starred_only: bool = False) -> list[Idea]:
        """List ideas of a novel, newest first."""
        stmt = select(Idea).where(Idea.novel_id == novel_id)
        if starred_only:
            stmt = stmt.where(Idea.is_starred.is_(True))
        result = await self.session.execute(stmt.order_by(Idea.created_at.desc()))
        return list(result.scalars().all())
