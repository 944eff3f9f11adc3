"""Version repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.resource import ResourceCategory
from ..models.template_item import TemplateItem
from ..models.version import Version


class VersionRepository:
    """Repository for version database operations.

    Multi-step operations (create with content, set default, delete) only
    stage changes; the version service owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_version(self, version_data: dict) -> Version:
        """Stage a version in the current transaction."""
        version = Version(**version_data)
        self.session.add(version)
        await self.session.flush()
        return version

    async def get_by_id_and_user(self, version_id: UUID, user_id: UUID) -> Optional[Version]:
        stmt = select(Version).where(and_(Version.id == version_id, Version.user_id == user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_default(self, user_id: UUID) -> Optional[Version]:
        stmt = select(Version).where(and_(Version.user_id == user_id, Version.is_default.is_(True)))
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_for_user(self, user_id: UUID) -> List[Version]:
        """List versions, default first, then by creation."""
        stmt = (
            select(Version)
            .where(Version.user_id == user_id)
            .order_by(Version.is_default.desc(), Version.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def count_for_user(self, user_id: UUID) -> int:
        stmt = select(func.count(Version.id)).where(Version.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def content_counts(self, user_id: UUID) -> dict:
        """Template and category counts per version id."""
        counts: dict = {}

        template_stmt = (
            select(TemplateItem.version_id, func.count(TemplateItem.id))
            .where(and_(TemplateItem.user_id == user_id, TemplateItem.version_id.is_not(None)))
            .group_by(TemplateItem.version_id)
        )
        for version_id, count in (await self.session.execute(template_stmt)).all():
            counts.setdefault(version_id, {"template_count": 0, "category_count": 0})
            counts[version_id]["template_count"] = count

        category_stmt = (
            select(ResourceCategory.version_id, func.count(ResourceCategory.id))
            .where(
                and_(ResourceCategory.user_id == user_id, ResourceCategory.version_id.is_not(None))
            )
            .group_by(ResourceCategory.version_id)
        )
        for version_id, count in (await self.session.execute(category_stmt)).all():
            counts.setdefault(version_id, {"template_count": 0, "category_count": 0})
            counts[version_id]["category_count"] = count

        return counts

    async def update_version(self, version_id: UUID, user_id: UUID, update_data: dict) -> Optional[Version]:
        version = await self.get_by_id_and_user(version_id, user_id)
        if not version:
            return None

        for key, value in update_data.items():
            setattr(version, key, value)

        await self.session.commit()
        await self.session.refresh(version)
        return version

    async def unset_defaults(self, user_id: UUID) -> None:
        """Clear the default flag on every version of the user."""
        stmt = (
            update(Version)
            .where(and_(Version.user_id == user_id, Version.is_default.is_(True)))
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)

    async def mark_default(self, version_id: UUID, user_id: UUID) -> int:
        stmt = (
            update(Version)
            .where(and_(Version.id == version_id, Version.user_id == user_id))
            .values(is_default=True)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete_version(self, version: Version) -> None:
        """Stage deletion of a version row; content is removed by the caller."""
        await self.session.delete(version)
        await self.session.flush()
