"""User repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.refresh_token import RefreshToken
from ..models.user import User
from ..models.version import Version
from .resource_repository import ResourceRepository
from .share_repository import ShareRepository
from .template_repository import TemplateRepository


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_user(self, user_data: dict) -> User:
        """Stage a user in the current transaction."""
        user = User(**user_data)
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        stmt = select(User).where(User.email == User.normalize_email(email))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def lock_user(self, user_id: UUID) -> Optional[User]:
        """SELECT ... FOR UPDATE on the user row; serializes per-user writes."""
        stmt = select(User).where(User.id == user_id).with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_user(self, user_id: UUID, update_data: dict) -> Optional[User]:
        """Update user data."""
        user = await self.get_by_id(user_id)
        if not user:
            return None

        for key, value in update_data.items():
            setattr(user, key, value)

        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete user and everything they own."""
        user = await self.get_by_id(user_id)
        if not user:
            return False

        await ShareRepository(self.session).delete_for_user(user_id)
        await ResourceRepository(self.session).delete_for_user(user_id)
        await TemplateRepository(self.session).delete_for_user(user_id)
        await self.session.execute(delete(Version).where(Version.user_id == user_id))
        await self.session.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        await self.session.delete(user)
        await self.session.commit()
        return True

    async def is_email_taken(self, email: str) -> bool:
        """Check if email exists."""
        user = await self.get_by_email(email)
        return user is not None
