"""Resource library API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ApiResponse
from ..core.schemas.resources import (
    ResourceCategoryCreate,
    ResourceCategoryResponse,
    ResourceCreate,
    ResourceResponse,
)
from ..core.services import ResourceService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/resources", tags=["resources"])


@router.get("", response_model=ApiResponse[List[ResourceCategoryResponse]])
async def list_categories(
    version_id: Optional[UUID] = Query(None, description="Version to list, default version when omitted"),
    unversioned: bool = Query(False, description="List content that belongs to no version"),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List job-story categories with their resources."""
    resource_service = ResourceService(session)
    return ApiResponse(data=await resource_service.list_categories(current_user_id, version_id, unversioned))


@router.post("", response_model=ApiResponse[ResourceCategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(
    request: ResourceCategoryCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    resource_service = ResourceService(session)
    return ApiResponse(data=await resource_service.create_category(current_user_id, request))


@router.delete("/items/{resource_id}", response_model=ApiResponse[None])
async def delete_resource(
    resource_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    resource_service = ResourceService(session)
    await resource_service.delete_resource(current_user_id, resource_id)
    return ApiResponse(message="Resource deleted")


@router.post(
    "/{category_id}/items",
    response_model=ApiResponse[ResourceResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_resource(
    category_id: UUID,
    request: ResourceCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Add a resource to a category."""
    resource_service = ResourceService(session)
    return ApiResponse(data=await resource_service.add_resource(current_user_id, category_id, request))


@router.delete("/{category_id}", response_model=ApiResponse[None])
async def delete_category(
    category_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a category and every resource in it."""
    resource_service = ResourceService(session)
    await resource_service.delete_category(current_user_id, category_id)
    return ApiResponse(message="Category deleted")
