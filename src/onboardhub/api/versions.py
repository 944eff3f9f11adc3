"""Version management API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ApiResponse
from ..core.schemas.versions import VersionCreate, VersionResponse, VersionUpdate
from ..core.services import VersionService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/versions", tags=["versions"])


@router.get("", response_model=ApiResponse[List[VersionResponse]])
async def list_versions(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List versions, default first."""
    version_service = VersionService(session)
    return ApiResponse(data=await version_service.list_versions(current_user_id))


@router.post("", response_model=ApiResponse[VersionResponse], status_code=status.HTTP_201_CREATED)
async def create_version(
    request: VersionCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a version, duplicating `copy_from_version_id` or seeding defaults."""
    version_service = VersionService(session)
    return ApiResponse(data=await version_service.create_version(current_user_id, request))


@router.put("/{version_id}", response_model=ApiResponse[VersionResponse])
async def update_version(
    version_id: UUID,
    request: VersionUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    version_service = VersionService(session)
    return ApiResponse(data=await version_service.update_version(current_user_id, version_id, request))


@router.post("/{version_id}/default", response_model=ApiResponse[VersionResponse])
async def set_default_version(
    version_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    version_service = VersionService(session)
    return ApiResponse(data=await version_service.set_default(current_user_id, version_id))


@router.delete("/{version_id}", response_model=ApiResponse[None])
async def delete_version(
    version_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a non-default version with its content."""
    version_service = VersionService(session)
    await version_service.delete_version(current_user_id, version_id)
    return ApiResponse(message="Version deleted")
