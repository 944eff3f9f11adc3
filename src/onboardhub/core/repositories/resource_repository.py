"""Resource library repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.resource import Resource, ResourceCategory
from .template_repository import version_scope


class ResourceRepository:
    """Repository for resource categories and their resources."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _categories_stmt(self):
        # populate_existing refreshes collections already present in the identity map
        return (
            select(ResourceCategory)
            .options(selectinload(ResourceCategory.resources))
            .execution_options(populate_existing=True)
        )

    async def create_category(self, category_data: dict, resources: Optional[List[dict]] = None) -> ResourceCategory:
        """Create a category together with its initial resources."""
        category = ResourceCategory(**category_data)
        self.session.add(category)
        await self.session.flush()

        for resource_data in resources or []:
            self.session.add(Resource(category_id=category.id, **resource_data))

        await self.session.commit()
        return await self.get_category(category.id, category.user_id)

    async def add_category(self, category_data: dict) -> ResourceCategory:
        """Stage a category in the current transaction."""
        category = ResourceCategory(**category_data)
        self.session.add(category)
        await self.session.flush()
        return category

    async def add_resource(self, resource_data: dict) -> Resource:
        """Stage a resource in the current transaction."""
        resource = Resource(**resource_data)
        self.session.add(resource)
        await self.session.flush()
        return resource

    async def create_resource(self, resource_data: dict) -> Resource:
        resource = Resource(**resource_data)
        self.session.add(resource)
        await self.session.commit()
        await self.session.refresh(resource)
        return resource

    async def get_category(self, category_id: UUID, user_id: UUID) -> Optional[ResourceCategory]:
        """Get category with resources if owned by user."""
        stmt = self._categories_stmt().where(
            and_(ResourceCategory.id == category_id, ResourceCategory.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_scope(self, user_id: UUID, version_id: Optional[UUID]) -> List[ResourceCategory]:
        """List categories of one version (or legacy categories) with their resources."""
        stmt = (
            self._categories_stmt()
            .where(
                and_(
                    ResourceCategory.user_id == user_id,
                    version_scope(ResourceCategory.version_id, version_id),
                )
            )
            .order_by(ResourceCategory.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def find_by_label(
        self, user_id: UUID, version_id: Optional[UUID], label: str
    ) -> Optional[ResourceCategory]:
        """First category in scope carrying the given label."""
        stmt = (
            self._categories_stmt()
            .where(
                and_(
                    ResourceCategory.user_id == user_id,
                    version_scope(ResourceCategory.version_id, version_id),
                    ResourceCategory.category == label,
                )
            )
            .order_by(ResourceCategory.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def delete_category(self, category_id: UUID, user_id: UUID) -> bool:
        """Delete category and its resources if owned by user."""
        category = await self.get_category(category_id, user_id)
        if not category:
            return False

        await self.session.execute(delete(Resource).where(Resource.category_id == category_id))
        await self.session.execute(delete(ResourceCategory).where(ResourceCategory.id == category_id))
        await self.session.commit()
        return True

    async def get_resource(self, resource_id: UUID, user_id: UUID) -> Optional[Resource]:
        """Get resource if its category is owned by user."""
        stmt = (
            select(Resource)
            .join(ResourceCategory, Resource.category_id == ResourceCategory.id)
            .where(and_(Resource.id == resource_id, ResourceCategory.user_id == user_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_resource(self, resource_id: UUID, user_id: UUID) -> bool:
        resource = await self.get_resource(resource_id, user_id)
        if not resource:
            return False

        await self.session.execute(delete(Resource).where(Resource.id == resource_id))
        await self.session.commit()
        return True

    async def count_by_scope(self, user_id: UUID, version_id: Optional[UUID]) -> int:
        stmt = select(func.count(ResourceCategory.id)).where(
            and_(
                ResourceCategory.user_id == user_id,
                version_scope(ResourceCategory.version_id, version_id),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_for_user(self, user_id: UUID) -> int:
        """Count every category the user owns, in any version."""
        stmt = select(func.count(ResourceCategory.id)).where(ResourceCategory.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_resources(self, category_id: UUID) -> int:
        stmt = select(func.count(Resource.id)).where(Resource.category_id == category_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def delete_by_version(self, user_id: UUID, version_id: UUID) -> int:
        """Remove every category of a version with its resources; caller commits."""
        category_ids = select(ResourceCategory.id).where(
            and_(ResourceCategory.user_id == user_id, ResourceCategory.version_id == version_id)
        )
        await self.session.execute(delete(Resource).where(Resource.category_id.in_(category_ids)))
        result = await self.session.execute(
            delete(ResourceCategory).where(
                and_(ResourceCategory.user_id == user_id, ResourceCategory.version_id == version_id)
            )
        )
        return result.rowcount

    async def delete_for_user(self, user_id: UUID) -> int:
        category_ids = select(ResourceCategory.id).where(ResourceCategory.user_id == user_id)
        await self.session.execute(delete(Resource).where(Resource.category_id.in_(category_ids)))
        result = await self.session.execute(
            delete(ResourceCategory).where(ResourceCategory.user_id == user_id)
        )
        return result.rowcount
