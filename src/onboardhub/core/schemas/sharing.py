"""
Share and clone schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .resources import ResourceCategoryResponse
from .templates import TemplateItemResponse


class ShareCreateRequest(BaseModel):
    """Request to issue an invite link."""

    title: str = Field(max_length=200, description="Share title shown to recipients")
    description: Optional[str] = Field(default=None, max_length=1000)
    expires_in_days: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("expires_in_days", "expiresInDays"),
        ge=0,
        le=365,
        description="Days until the link expires; 0 or null never expires",
    )
    max_clones: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("max_clones", "maxClones"),
        ge=1,
        description="Maximum number of clones; null for unlimited",
    )
    version_id: Optional[uuid.UUID] = Field(
        default=None,
        validation_alias=AliasChoices("version_id", "versionId"),
        description="Version to share; the default version when omitted",
    )

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        # emptiness is reported by the issuer as a domain error
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Design team onboarding",
                "description": "Checklist and tools for new designers",
                "expires_in_days": 7,
                "max_clones": 10,
            }
        }
    )


class ShareLinkResponse(BaseModel):
    """Issued share."""

    share_id: uuid.UUID
    invite_token: str
    invite_url: str
    title: str
    description: Optional[str] = None
    expires_at: Optional[datetime] = None
    max_clones: Optional[int] = None


class ShareListItem(ShareLinkResponse):
    """Share as listed for its owner."""

    version_id: Optional[uuid.UUID] = None
    clone_count: int
    is_active: bool
    is_expired: bool
    created_at: datetime


class ShareOwner(BaseModel):
    name: str
    email: str
    avatar_url: Optional[str] = None


class ShareInfo(BaseModel):
    """Share metadata shown on the invite preview."""

    title: str
    description: Optional[str] = None
    owner: ShareOwner
    clone_count: int
    max_clones: Optional[int] = None
    expires_at: Optional[datetime] = None
    version_id: Optional[uuid.UUID] = None
    version_name: Optional[str] = None
    created_at: datetime


class SharedContentResponse(BaseModel):
    """Read-only projection of shared content."""

    share_info: ShareInfo
    templates: List[TemplateItemResponse] = Field(default_factory=list)
    resource_categories: List[ResourceCategoryResponse] = Field(default_factory=list)


class CloneRequest(BaseModel):
    """Clone request; the target defaults to the authenticated user."""

    user_id: Optional[uuid.UUID] = Field(
        default=None, validation_alias=AliasChoices("user_id", "userId"), description="Target user id"
    )
    confirmed: bool = Field(default=False, description="Merge into existing content")


class CloneResultResponse(BaseModel):
    """Counts describing what a clone did."""

    policy: str
    templates_processed: int = 0
    templates_added: int = 0
    templates_skipped: int = 0
    templates_failed: int = 0
    categories_processed: int = 0
    categories_added: int = 0
    categories_merged: int = 0
    categories_failed: int = 0
    resources_processed: int = 0
    resources_added: int = 0
    resources_skipped: int = 0
    resources_failed: int = 0
    version_id: Optional[uuid.UUID] = None
    version_name: Optional[str] = None
    clone_count: int = 0
    message: str = ""
