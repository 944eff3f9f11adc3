"""Share record repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, desc, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.share_record import ShareRecord


class ShareRepository:
    """Repository for share record database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_share(self, share_data: dict) -> ShareRecord:
        """Create new share record."""
        share = ShareRecord(**share_data)
        self.session.add(share)
        await self.session.commit()
        await self.session.refresh(share)
        return share

    async def get_by_id(self, share_id: UUID) -> Optional[ShareRecord]:
        """Get share by ID, bypassing any stale copy in the session."""
        stmt = (
            select(ShareRecord)
            .where(ShareRecord.id == share_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_token(self, invite_token: str) -> Optional[ShareRecord]:
        """Get active share by invite token."""
        stmt = (
            select(ShareRecord)
            .where(and_(ShareRecord.invite_token == invite_token, ShareRecord.is_active.is_(True)))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_share(self, share_id: UUID, user_id: UUID) -> Optional[ShareRecord]:
        """Get share if user is owner."""
        stmt = select(ShareRecord).where(
            and_(ShareRecord.id == share_id, ShareRecord.owner_user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_owner(self, user_id: UUID) -> List[ShareRecord]:
        """List shares created by user, newest first."""
        stmt = (
            select(ShareRecord)
            .where(ShareRecord.owner_user_id == user_id)
            .order_by(desc(ShareRecord.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def token_exists(self, invite_token: str) -> bool:
        stmt = select(ShareRecord.id).where(ShareRecord.invite_token == invite_token)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def deactivate_share(self, share_id: UUID, user_id: UUID) -> bool:
        """Revoke share if owned by user."""
        share = await self.get_user_share(share_id, user_id)
        if not share:
            return False

        share.revoke()
        await self.session.commit()
        return True

    async def deactivate_for_version(self, user_id: UUID, version_id: UUID) -> int:
        """Revoke every share bound to a version; caller commits."""
        stmt = (
            update(ShareRecord)
            .where(
                and_(
                    ShareRecord.owner_user_id == user_id,
                    ShareRecord.version_id == version_id,
                )
            )
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def claim_clone_slot(self, share_id: UUID) -> bool:
        """Atomically take one clone slot.

        Single conditional UPDATE: succeeds only while the share is active
        and under its limit, so concurrent claims can never exceed
        ``max_clones``. Does not commit.
        """
        stmt = (
            update(ShareRecord)
            .where(
                and_(
                    ShareRecord.id == share_id,
                    ShareRecord.is_active.is_(True),
                    or_(
                        ShareRecord.max_clones.is_(None),
                        ShareRecord.clone_count < ShareRecord.max_clones,
                    ),
                )
            )
            .values(clone_count=ShareRecord.clone_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_for_user(self, user_id: UUID) -> int:
        stmt = delete(ShareRecord).where(ShareRecord.owner_user_id == user_id)
        result = await self.session.execute(stmt)
        return result.rowcount
