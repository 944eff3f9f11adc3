"""Resource library service implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError
from ..repositories.resource_repository import ResourceRepository
from ..schemas.resources import (
    ResourceCategoryCreate,
    ResourceCategoryResponse,
    ResourceCreate,
    ResourceResponse,
)
from .interfaces import IResourceService
from .version_service import resolve_version_scope


class ResourceService(IResourceService):
    """Job-story categories and the resources they own."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.resource_repo = ResourceRepository(session)

    async def list_categories(
        self, user_id: UUID, version_id: Optional[UUID] = None, unversioned: bool = False
    ) -> List[ResourceCategoryResponse]:
        scope = None if unversioned else await resolve_version_scope(self.session, user_id, version_id)
        categories = await self.resource_repo.list_by_scope(user_id, scope)
        return [ResourceCategoryResponse.model_validate(c) for c in categories]

    async def create_category(self, user_id: UUID, request: ResourceCategoryCreate) -> ResourceCategoryResponse:
        scope = await resolve_version_scope(self.session, user_id, request.version_id)
        category = await self.resource_repo.create_category(
            {
                "user_id": user_id,
                "version_id": scope,
                "category": request.category,
                "job": request.job,
                "situation": request.situation,
                "outcome": request.outcome,
            },
            resources=[
                {"name": r.name, "type": r.type.value, "url": r.url} for r in request.resources
            ],
        )
        return ResourceCategoryResponse.model_validate(category)

    async def add_resource(self, user_id: UUID, category_id: UUID, request: ResourceCreate) -> ResourceResponse:
        category = await self.resource_repo.get_category(category_id, user_id)
        if not category:
            raise NotFoundError("Resource category", category_id)

        resource = await self.resource_repo.create_resource(
            {
                "category_id": category.id,
                "name": request.name,
                "type": request.type.value,
                "url": request.url,
            }
        )
        return ResourceResponse.model_validate(resource)

    async def delete_category(self, user_id: UUID, category_id: UUID) -> bool:
        if not await self.resource_repo.delete_category(category_id, user_id):
            raise NotFoundError("Resource category", category_id)
        return True

    async def delete_resource(self, user_id: UUID, resource_id: UUID) -> bool:
        if not await self.resource_repo.delete_resource(resource_id, user_id):
            raise NotFoundError("Resource", resource_id)
        return True
