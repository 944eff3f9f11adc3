"""Authentication service implementation."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import blacklist_token, create_identity_token, hash_password, verify_password
from ..exceptions import AuthenticationError, ConflictError, NotFoundError, StoreError
from ..logging import get_logger
from ..models.user import User
from ..redis_client import get_redis_client
from ..repositories.refresh_token_repository import RefreshTokenRepository
from ..repositories.user_repository import UserRepository
from ..repositories.version_repository import VersionRepository
from ..schemas.auth import (
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdateRequest,
)
from .interfaces import IAuthService
from .provisioning import seed_default_content

logger = get_logger("services.auth")


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.token_repo = RefreshTokenRepository(session)
        self.version_repo = VersionRepository(session)
        self.settings = get_settings()

    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user with a default version holding the baseline content."""
        email = User.normalize_email(request.email)
        if await self.user_repo.is_email_taken(email):
            raise ConflictError("Email already registered")

        try:
            user = await self.user_repo.add_user(
                {
                    "email": email,
                    "name": request.name,
                    "password_hash": hash_password(request.password),
                    "is_active": True,
                }
            )
            version = await self.version_repo.add_version(
                {"user_id": user.id, "name": self.settings.default_version_name, "is_default": True}
            )
            if self.settings.seed_default_content:
                await seed_default_content(self.session, user.id, version.id)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Email already registered") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to register user: {e}")
            raise StoreError("Failed to create account") from e

        logger.info(f"Registered user {user.id}")
        return UserResponse.model_validate(user)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return JWT tokens."""
        user = await self.user_repo.get_by_email(request.email)
        if not user or not user.can_login() or not verify_password(request.password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        return await self._issue_tokens(user)

    async def refresh_token(self, request: RefreshTokenRequest) -> TokenResponse:
        """Rotate refresh token: the presented token is consumed."""
        token_obj = await self.token_repo.get_by_token(request.refresh_token)
        if not token_obj or not token_obj.is_valid:
            raise AuthenticationError("Invalid refresh token")

        user = await self.user_repo.get_by_id(token_obj.user_id)
        if not user or not user.is_active:
            raise AuthenticationError("User account inactive")

        old_session = await get_redis_client().get_user_session(request.refresh_token)
        await self.token_repo.delete_token(request.refresh_token)
        await get_redis_client().delete(f"session:{request.refresh_token}")

        login_time = old_session.get("login_time") if old_session else None
        return await self._issue_tokens(user, login_time=login_time)

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return UserResponse.model_validate(user)

    async def update_user_profile(self, user_id: UUID, request: UserUpdateRequest) -> UserResponse:
        """Update name and avatar."""
        update_data = request.model_dump(exclude_unset=True)
        if update_data.get("name") is not None:
            update_data["name"] = update_data["name"].strip()
        elif "name" in update_data:
            del update_data["name"]

        if update_data:
            user = await self.user_repo.update_user(user_id, update_data)
        else:
            user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        return UserResponse.model_validate(user)

    async def logout_user(self, user_id: UUID, access_token: str) -> bool:
        """Blacklist the access token and drop every refresh token of the user."""
        if not await blacklist_token(access_token):
            logger.warning(f"Access token of user {user_id} was not blacklisted")

        deleted_count = await self.token_repo.delete_user_tokens(user_id)
        await get_redis_client().invalidate_user_sessions(user_id)

        logger.info(f"User {user_id} logged out, {deleted_count} refresh token(s) removed")
        return True

    async def delete_account(self, user_id: UUID, access_token: Optional[str] = None) -> bool:
        """Delete the user with all versions, content, shares and tokens."""
        try:
            deleted = await self.user_repo.delete_user(user_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to delete account {user_id}: {e}")
            raise StoreError("Failed to delete account") from e
        if not deleted:
            raise NotFoundError("User", user_id)

        if access_token:
            await blacklist_token(access_token)
        await get_redis_client().invalidate_user_sessions(user_id)

        logger.info(f"Deleted account {user_id}")
        return True

    async def _issue_tokens(self, user: User, login_time: Optional[str] = None) -> TokenResponse:
        access_token = create_identity_token(user.id, user.email, user.name)
        refresh = await self.token_repo.create_token(
            user.id, expires_days=self.settings.refresh_token_expire_days
        )

        now = datetime.now(timezone.utc).isoformat()
        await get_redis_client().cache_user_session(
            session_id=refresh.token,
            user_data={
                "user_id": str(user.id),
                "email": user.email,
                "name": user.name,
                "login_time": login_time or now,
                "last_activity": now,
            },
            expire=self.settings.refresh_token_expire_days * 24 * 3600,
        )

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh.token,
            token_type="bearer",
            expires_in=self.settings.access_token_expire_minutes * 60,
            user=UserResponse.model_validate(user),
        )
