"""Onboarding checklist service implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError
from ..repositories.template_repository import TemplateRepository
from ..schemas.templates import TemplateItemCreate, TemplateItemResponse, TemplateItemUpdate
from .interfaces import ITemplateService
from .version_service import resolve_version_scope


class TemplateService(ITemplateService):
    """Checklist CRUD scoped to one version at a time."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.template_repo = TemplateRepository(session)

    async def list_items(
        self, user_id: UUID, version_id: Optional[UUID] = None, unversioned: bool = False
    ) -> List[TemplateItemResponse]:
        # flat-merged clones live outside every version
        scope = None if unversioned else await resolve_version_scope(self.session, user_id, version_id)
        items = await self.template_repo.list_by_scope(user_id, scope)
        return [TemplateItemResponse.model_validate(item) for item in items]

    async def create_item(self, user_id: UUID, request: TemplateItemCreate) -> TemplateItemResponse:
        scope = await resolve_version_scope(self.session, user_id, request.version_id)
        item = await self.template_repo.create_item(
            {
                "user_id": user_id,
                "version_id": scope,
                "period": request.period.value,
                "title": request.title,
                "priority": request.priority.value,
                "completed": False,
            }
        )
        return TemplateItemResponse.model_validate(item)

    async def update_item(self, user_id: UUID, item_id: UUID, request: TemplateItemUpdate) -> TemplateItemResponse:
        update_data = request.model_dump(exclude_unset=True, exclude_none=True)
        for key in ("period", "priority"):
            if key in update_data:
                update_data[key] = update_data[key].value

        if update_data:
            item = await self.template_repo.update_item(item_id, user_id, update_data)
        else:
            item = await self.template_repo.get_by_id_and_user(item_id, user_id)
        if not item:
            raise NotFoundError("Template item", item_id)

        return TemplateItemResponse.model_validate(item)

    async def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        if not await self.template_repo.delete_item(item_id, user_id):
            raise NotFoundError("Template item", item_id)
        return True
