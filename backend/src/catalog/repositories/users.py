"""User data access: the generic repository plus account lookups."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models import User, UserStatus
from catalog.repositories.base import EntityShape, Repository

USER = EntityShape(User)


class UserRepository(Repository[User]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, USER)

    async def _first(self, *conditions: object) -> User | None:
        result = await self.db.execute(select(User).where(*conditions).order_by(User.id).limit(1))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        return await self._first(User.email == email)

    async def get_active_by_email(self, email: str) -> User | None:
        return await self._first(User.email == email, User.status == UserStatus.ACTIVE)

    async def get_pending_by_token(self, token: str) -> User | None:
        """Account awaiting verification with this token."""
        if not token:
            return None
        return await self._first(User.token == token, User.status == UserStatus.PENDING)

    async def get_active_by_token(self, token: str) -> User | None:
        """Verified account holding this password reset token."""
        if not token:
            return None
        return await self._first(User.token == token, User.status == UserStatus.ACTIVE)
