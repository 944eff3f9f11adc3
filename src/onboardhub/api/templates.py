"""Onboarding checklist API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ApiResponse
from ..core.schemas.templates import TemplateItemCreate, TemplateItemResponse, TemplateItemUpdate
from ..core.services import TemplateService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=ApiResponse[List[TemplateItemResponse]])
async def list_templates(
    version_id: Optional[UUID] = Query(None, description="Version to list, default version when omitted"),
    unversioned: bool = Query(False, description="List content that belongs to no version"),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List checklist items ordered by period."""
    template_service = TemplateService(session)
    return ApiResponse(data=await template_service.list_items(current_user_id, version_id, unversioned))


@router.post("", response_model=ApiResponse[TemplateItemResponse], status_code=status.HTTP_201_CREATED)
async def create_template(
    request: TemplateItemCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    template_service = TemplateService(session)
    return ApiResponse(data=await template_service.create_item(current_user_id, request))


@router.put("/{item_id}", response_model=ApiResponse[TemplateItemResponse])
async def update_template(
    item_id: UUID,
    request: TemplateItemUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update title, completion, priority or period."""
    template_service = TemplateService(session)
    return ApiResponse(data=await template_service.update_item(current_user_id, item_id, request))


@router.delete("/{item_id}", response_model=ApiResponse[None])
async def delete_template(
    item_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    template_service = TemplateService(session)
    await template_service.delete_item(current_user_id, item_id)
    return ApiResponse(message="Template deleted")
