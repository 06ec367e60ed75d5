"""Repository for User model."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync.data.clock import Clock
from novelsync.data.models.user import User
from novelsync.data.repositories.base import VersionedRepository


class UserRepository(VersionedRepository[User]):
    """Repository for User model."""

    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        super().__init__(User, session, clock)

    async def get_by_username(self, username: str) -> User | None:
        """Fetch a user by username."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()
