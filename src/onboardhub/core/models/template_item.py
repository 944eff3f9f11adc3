# Onboarding checklist items
import uuid
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class Period(str, Enum):
    """Onboarding timeline buckets."""

    FIRST_DAY = "firstDay"
    FIRST_WEEK = "firstWeek"
    SECOND_WEEK = "secondWeek"
    THIRD_WEEK = "thirdWeek"
    FIRST_MONTH = "firstMonth"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# display/sort order of periods
PERIOD_ORDER = {period.value: index for index, period in enumerate(Period)}


class TemplateItem(BaseModel):
    """Single checklist task in one period bucket."""

    __tablename__ = "template_items"

    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    version_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("versions.id", ondelete="CASCADE"), nullable=True
    )

    period: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    priority: Mapped[str] = mapped_column(String(10), default=Priority.MEDIUM.value, nullable=False)

    __table_args__ = (
        CheckConstraint("length(title) <= 300", name="ck_template_items_title_len"),
        CheckConstraint(
            "priority IN ('high', 'medium', 'low')", name="ck_template_items_priority"
        ),
        Index("idx_template_items_user_id", "user_id"),
        Index("idx_template_items_user_version", "user_id", "version_id"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<TemplateItem(title='{truncated}', period={self.period})>"

    @property
    def dedup_key(self) -> tuple[str, str]:
        """Identity used when merging cloned items."""
        return (self.title, self.period)

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id
