"""
Resource library schemas (job-story categories and their resources).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.resource import ResourceType


class ResourceCreate(BaseModel):
    """Resource creation request schema."""

    name: str = Field(min_length=1, max_length=200)
    type: ResourceType = Field(default=ResourceType.REFERENCE)
    url: str = Field(min_length=1, max_length=2000)

    @field_validator("name", "url")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v


class ResourceCategoryCreate(BaseModel):
    """Category creation request; ``resources`` are added in the same call."""

    category: str = Field(min_length=1, max_length=200, description="Category label")
    job: str = Field(min_length=1, description="What the user wants to do")
    situation: str = Field(min_length=1, description="When this applies")
    outcome: str = Field(min_length=1, description="What it enables")
    version_id: Optional[uuid.UUID] = Field(
        default=None, description="Target version, the default version when omitted"
    )
    resources: List[ResourceCreate] = Field(default_factory=list, max_length=100)

    @field_validator("category")
    @classmethod
    def strip_category(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category cannot be empty")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "category": "Design Tools & Systems",
                "job": "create consistent designs",
                "situation": "access to design systems and tools",
                "outcome": "work efficiently and maintain brand consistency",
                "resources": [
                    {"name": "Figma Component Library", "type": "tool", "url": "https://figma.com"}
                ],
            }
        }
    )


class ResourceResponse(BaseModel):
    id: uuid.UUID
    category_id: uuid.UUID
    name: str
    type: str
    url: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ResourceCategoryResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    version_id: Optional[uuid.UUID] = None
    category: str
    job: str
    situation: str
    outcome: str
    resources: List[ResourceResponse] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
