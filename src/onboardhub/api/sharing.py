"""Sharing API endpoints: issue, preview, clone, list and revoke invite links."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import PermissionDeniedError
from ..core.schemas.common import ApiResponse
from ..core.schemas.sharing import (
    CloneRequest,
    CloneResultResponse,
    SharedContentResponse,
    ShareCreateRequest,
    ShareLinkResponse,
    ShareListItem,
)
from ..core.services import CloneService, SharingService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/sharing", tags=["sharing"])


@router.post("/share", response_model=ApiResponse[ShareLinkResponse], status_code=status.HTTP_201_CREATED)
async def issue_share(
    request: ShareCreateRequest,
    http_request: Request,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create an invite link for the caller's content."""
    sharing_service = SharingService(session)
    share = await sharing_service.issue_share(current_user_id, request, str(http_request.base_url))
    return ApiResponse(data=share, message="Share link created")


@router.get("/shared/{invite_token}", response_model=ApiResponse[SharedContentResponse])
async def preview_share(
    invite_token: str,
    http_request: Request,
    session: AsyncSession = Depends(get_db_session),
):
    """Public preview of shared content; does not count as a clone."""
    sharing_service = SharingService(session)
    client_ip = http_request.client.host if http_request.client else "unknown"
    await sharing_service.enforce_preview_rate_limit(client_ip)
    return ApiResponse(data=await sharing_service.resolve_share(invite_token))


@router.post("/clone/{invite_token}", response_model=ApiResponse[CloneResultResponse])
async def clone_share(
    invite_token: str,
    request: Optional[CloneRequest] = None,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Copy shared content into the caller's account.

    Answers ``requires_confirmation`` (HTTP 200) when the caller already has
    content and did not send ``confirmed: true``.
    """
    request = request or CloneRequest()
    if request.user_id is not None and request.user_id != current_user_id:
        raise PermissionDeniedError("Cannot clone into another user's account")

    clone_service = CloneService(session)
    result = await clone_service.clone_share(invite_token, current_user_id, confirmed=request.confirmed)
    return ApiResponse(data=result, message=result.message)


@router.get("/my-shares/{user_id}", response_model=ApiResponse[List[ShareListItem]])
async def list_my_shares(
    user_id: UUID,
    http_request: Request,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List invite links issued by the caller."""
    if user_id != current_user_id:
        raise PermissionDeniedError("Cannot list another user's shares")

    sharing_service = SharingService(session)
    return ApiResponse(data=await sharing_service.list_shares(current_user_id, str(http_request.base_url)))


@router.delete("/share/{share_id}", response_model=ApiResponse[None])
async def revoke_share(
    share_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Deactivate an invite link."""
    sharing_service = SharingService(session)
    await sharing_service.revoke_share(current_user_id, share_id)
    return ApiResponse(message="Share link revoked")
