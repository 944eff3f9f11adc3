"""
Version management schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VersionCreate(BaseModel):
    """Create a version, optionally duplicating another one."""

    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    copy_from_version_id: Optional[uuid.UUID] = Field(
        default=None, description="Duplicate this version's content; seed baseline content when omitted"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Engineering onboarding", "copy_from_version_id": None}
        }
    )


class VersionUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class VersionResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    description: Optional[str] = None
    is_default: bool
    template_count: int = 0
    category_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
