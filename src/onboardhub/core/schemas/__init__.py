"""
Pydantic schemas for validating and documenting API requests and responses.

This package exposes the Pydantic models used across the application to
define input/output contracts for authentication, the onboarding
checklist, the resource library, versions, sharing, and the common
response envelope.
"""

from .auth import (
    Identity,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdateRequest,
)
from .common import ApiResponse, ConfirmationRequiredResponse, ErrorResponse, HealthCheckResponse
from .resources import (
    ResourceCategoryCreate,
    ResourceCategoryResponse,
    ResourceCreate,
    ResourceResponse,
)
from .sharing import (
    CloneRequest,
    CloneResultResponse,
    SharedContentResponse,
    ShareCreateRequest,
    ShareInfo,
    ShareLinkResponse,
    ShareListItem,
    ShareOwner,
)
from .templates import TemplateItemCreate, TemplateItemResponse, TemplateItemUpdate
from .versions import VersionCreate, VersionResponse, VersionUpdate

__all__ = [
    # Auth schemas
    "Identity",
    "LoginRequest",
    "RefreshTokenRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "UserUpdateRequest",
    # Template schemas
    "TemplateItemCreate",
    "TemplateItemUpdate",
    "TemplateItemResponse",
    # Resource schemas
    "ResourceCategoryCreate",
    "ResourceCategoryResponse",
    "ResourceCreate",
    "ResourceResponse",
    # Version schemas
    "VersionCreate",
    "VersionUpdate",
    "VersionResponse",
    # Sharing schemas
    "ShareCreateRequest",
    "ShareLinkResponse",
    "ShareListItem",
    "ShareOwner",
    "ShareInfo",
    "SharedContentResponse",
    "CloneRequest",
    "CloneResultResponse",
    # Common schemas
    "ApiResponse",
    "ConfirmationRequiredResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
