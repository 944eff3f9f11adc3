# Resource library: job-story categories and their resources
import uuid
from enum import Enum
from typing import List, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text, event
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import attributes as orm_attributes
from sqlalchemy.orm import mapped_column, relationship

from .base import BaseModel
from .types import GUID


class ResourceType(str, Enum):
    TOOL = "tool"
    GUIDE = "guide"
    REFERENCE = "reference"
    TEMPLATE = "template"
    DATABASE = "database"


class ResourceCategory(BaseModel):
    """Category described by a job story: when <situation>, I want to <job>, so I can <outcome>."""

    __tablename__ = "resource_categories"

    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    version_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("versions.id", ondelete="CASCADE"), nullable=True
    )

    category: Mapped[str] = mapped_column(String(200), nullable=False)
    job: Mapped[str] = mapped_column(Text, nullable=False, default="")
    situation: Mapped[str] = mapped_column(Text, nullable=False, default="")
    outcome: Mapped[str] = mapped_column(Text, nullable=False, default="")

    resources: Mapped[List["Resource"]] = relationship(
        "Resource",
        back_populates="category_ref",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Resource.created_at",
    )

    __table_args__ = (
        CheckConstraint("length(category) <= 200", name="ck_resource_categories_category_len"),
        Index("idx_resource_categories_user_id", "user_id"),
        Index("idx_resource_categories_user_version", "user_id", "version_id"),
    )

    def __repr__(self) -> str:
        return f"<ResourceCategory(category='{self.category}', user_id={self.user_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id


class Resource(BaseModel):
    """Named link inside a category."""

    __tablename__ = "resources"

    category_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("resource_categories.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default=ResourceType.REFERENCE.value)
    url: Mapped[str] = mapped_column(String(2000), nullable=False)

    category_ref: Mapped["ResourceCategory"] = relationship(
        "ResourceCategory", back_populates="resources"
    )

    __table_args__ = (
        CheckConstraint("length(name) <= 200", name="ck_resources_name_len"),
        Index("idx_resources_category_id", "category_id"),
    )

    def __repr__(self) -> str:
        return f"<Resource(name='{self.name}', type={self.type})>"

    @property
    def dedup_key(self) -> tuple[str, str]:
        """Identity used when merging cloned resources."""
        return (self.name, self.url)


# Fresh categories start with a loaded, empty collection so async code never lazy-loads it
@event.listens_for(ResourceCategory, "init", propagate=True)
def _init_category_resources(target, args, kwargs):
    if "resources" not in kwargs:
        orm_attributes.set_committed_value(target, "resources", [])
