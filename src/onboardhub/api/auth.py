"""Authentication API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import (
    Identity,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdateRequest,
)
from ..core.schemas.common import ApiResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import get_current_identity, get_current_token, get_current_user_id

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new user with default onboarding content."""
    auth_service = AuthService(session)
    user = await auth_service.register_user(request)
    return ApiResponse(data=user, message="Account created")


@router.post("/login", response_model=ApiResponse[TokenResponse])
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login user and get JWT tokens."""
    auth_service = AuthService(session)
    return ApiResponse(data=await auth_service.authenticate_user(request))


@router.post("/refresh", response_model=ApiResponse[TokenResponse])
async def refresh_token(
    request: RefreshTokenRequest, session: AsyncSession = Depends(get_db_session)
):
    """Exchange a refresh token for a new token pair."""
    auth_service = AuthService(session)
    return ApiResponse(data=await auth_service.refresh_token(request))


@router.get("/verify", response_model=ApiResponse[Identity])
async def verify(identity: Identity = Depends(get_current_identity)):
    """Identity carried by the bearer token."""
    return ApiResponse(data=identity)


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get current user profile."""
    auth_service = AuthService(session)
    return ApiResponse(data=await auth_service.get_current_user(current_user_id))


@router.put("/me", response_model=ApiResponse[UserResponse])
async def update_profile(
    request: UserUpdateRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update user profile."""
    auth_service = AuthService(session)
    return ApiResponse(data=await auth_service.update_user_profile(current_user_id, request))


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    current_user_id: UUID = Depends(get_current_user_id),
    access_token: str = Depends(get_current_token),
    session: AsyncSession = Depends(get_db_session),
):
    """Logout user: blacklist the access token and revoke refresh tokens."""
    auth_service = AuthService(session)
    await auth_service.logout_user(current_user_id, access_token)
    return ApiResponse(message="Logged out successfully")


@router.delete("/delete-account", response_model=ApiResponse[None])
async def delete_account(
    current_user_id: UUID = Depends(get_current_user_id),
    access_token: str = Depends(get_current_token),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete the account and all data it owns."""
    auth_service = AuthService(session)
    await auth_service.delete_account(current_user_id, access_token)
    return ApiResponse(message="Account deleted successfully")
