"""Persistence for login sessions (refresh tokens)."""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.refresh_token import RefreshToken


class RefreshTokenRepository:
    """Refresh tokens are single use: rotation deletes the presented one."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_token(self, user_id: UUID, expires_days: int) -> RefreshToken:
        token = RefreshToken.create_for_user(user_id, expires_days=expires_days)
        self.session.add(token)
        await self.session.commit()
        await self.session.refresh(token)
        return token

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_token(self, token: str) -> bool:
        """Consume a token; False when it was already gone."""
        stmt = delete(RefreshToken).where(RefreshToken.token == token)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def delete_user_tokens(self, user_id: UUID) -> int:
        """End every session of a user (logout, account deletion)."""
        stmt = delete(RefreshToken).where(RefreshToken.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount
