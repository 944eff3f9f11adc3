"""
Onboarding checklist schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.template_item import Period, Priority


def _strip_title(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Title cannot be empty")
    return v


class TemplateItemCreate(BaseModel):
    """Template item creation request schema."""

    period: Period = Field(description="Onboarding period bucket")
    title: str = Field(min_length=1, max_length=300, description="Task title")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")
    version_id: Optional[uuid.UUID] = Field(
        default=None, description="Target version, the default version when omitted"
    )

    strip_title = field_validator("title")(_strip_title)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"period": "firstDay", "title": "Setup laptop", "priority": "high"}
        }
    )


class TemplateItemUpdate(BaseModel):
    """Template item update request schema."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    period: Optional[Period] = None

    strip_title = field_validator("title")(_strip_title)


class TemplateItemResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    version_id: Optional[uuid.UUID] = None
    period: str
    title: str
    completed: bool
    priority: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
