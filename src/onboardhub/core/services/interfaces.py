"""Service interfaces.

Each interface is implemented by one concrete service that takes an
``AsyncSession``; routers depend on the interface methods only.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..schemas.auth import (
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdateRequest,
)
from ..schemas.common import HealthCheckResponse
from ..schemas.resources import ResourceCategoryCreate, ResourceCategoryResponse, ResourceCreate, ResourceResponse
from ..schemas.sharing import (
    CloneResultResponse,
    SharedContentResponse,
    ShareCreateRequest,
    ShareLinkResponse,
    ShareListItem,
)
from ..schemas.templates import TemplateItemCreate, TemplateItemResponse, TemplateItemUpdate
from ..schemas.versions import VersionCreate, VersionResponse, VersionUpdate


class IAuthService(ABC):
    """Authentication service interface."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user and provision default content."""

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return tokens."""

    @abstractmethod
    async def refresh_token(self, request: RefreshTokenRequest) -> TokenResponse:
        """Rotate the refresh token and issue a new access token."""

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user information."""

    @abstractmethod
    async def update_user_profile(self, user_id: UUID, request: UserUpdateRequest) -> UserResponse:
        """Update user profile."""

    @abstractmethod
    async def logout_user(self, user_id: UUID, access_token: str) -> bool:
        """Logout user and invalidate tokens."""

    @abstractmethod
    async def delete_account(self, user_id: UUID, access_token: Optional[str] = None) -> bool:
        """Delete user and everything they own."""


class ITemplateService(ABC):
    """Onboarding checklist service interface."""

    @abstractmethod
    async def list_items(
        self, user_id: UUID, version_id: Optional[UUID] = None, unversioned: bool = False
    ) -> List[TemplateItemResponse]:
        """List items of a version (default version when omitted, legacy items when unversioned)."""

    @abstractmethod
    async def create_item(self, user_id: UUID, request: TemplateItemCreate) -> TemplateItemResponse:
        """Create checklist item."""

    @abstractmethod
    async def update_item(self, user_id: UUID, item_id: UUID, request: TemplateItemUpdate) -> TemplateItemResponse:
        """Update checklist item."""

    @abstractmethod
    async def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        """Delete checklist item."""


class IResourceService(ABC):
    """Resource library service interface."""

    @abstractmethod
    async def list_categories(
        self, user_id: UUID, version_id: Optional[UUID] = None, unversioned: bool = False
    ) -> List[ResourceCategoryResponse]:
        """List categories with resources."""

    @abstractmethod
    async def create_category(self, user_id: UUID, request: ResourceCategoryCreate) -> ResourceCategoryResponse:
        """Create category with its initial resources."""

    @abstractmethod
    async def add_resource(self, user_id: UUID, category_id: UUID, request: ResourceCreate) -> ResourceResponse:
        """Add resource to a category."""

    @abstractmethod
    async def delete_category(self, user_id: UUID, category_id: UUID) -> bool:
        """Delete category and its resources."""

    @abstractmethod
    async def delete_resource(self, user_id: UUID, resource_id: UUID) -> bool:
        """Delete one resource."""


class IVersionService(ABC):
    """Version manager interface."""

    @abstractmethod
    async def list_versions(self, user_id: UUID) -> List[VersionResponse]:
        """List versions with content counts."""

    @abstractmethod
    async def create_version(self, user_id: UUID, request: VersionCreate) -> VersionResponse:
        """Create version, copying or seeding content."""

    @abstractmethod
    async def update_version(self, user_id: UUID, version_id: UUID, request: VersionUpdate) -> VersionResponse:
        """Rename or describe a version."""

    @abstractmethod
    async def set_default(self, user_id: UUID, version_id: UUID) -> VersionResponse:
        """Make a version the user's only default."""

    @abstractmethod
    async def delete_version(self, user_id: UUID, version_id: UUID) -> bool:
        """Delete a non-default version and its content."""


class ISharingService(ABC):
    """Share-link issuer and resolver interface."""

    @abstractmethod
    async def issue_share(self, user_id: UUID, request: ShareCreateRequest, base_url: str) -> ShareLinkResponse:
        """Create invite link for the user's content."""

    @abstractmethod
    async def resolve_share(self, invite_token: str) -> SharedContentResponse:
        """Read-only projection of shared content."""

    @abstractmethod
    async def list_shares(self, user_id: UUID, base_url: str) -> List[ShareListItem]:
        """List shares issued by the user."""

    @abstractmethod
    async def revoke_share(self, user_id: UUID, share_id: UUID) -> bool:
        """Deactivate a share."""


class ICloneService(ABC):
    """Clone merge engine interface."""

    @abstractmethod
    async def clone_share(self, invite_token: str, target_user_id: UUID, confirmed: bool = False) -> CloneResultResponse:
        """Copy shared content into the target account."""


class IHealthService(ABC):
    """Health check service interface."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get application health status."""

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check database connectivity."""

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connectivity."""
