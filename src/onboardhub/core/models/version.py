# Named, user-scoped partitions of templates and resources
import uuid
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class Version(BaseModel):
    """A named set of template items and resource categories.

    Each user has exactly one default version once they have any. Items
    whose ``version_id`` is NULL predate versioning (legacy/ungrouped).
    """

    __tablename__ = "versions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        CheckConstraint("length(name) <= 100", name="ck_versions_name_len"),
        Index("idx_versions_user_id", "user_id"),
        # at most one default per user
        Index(
            "uq_versions_user_default",
            "user_id",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default = 1"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Version(name='{self.name}', user_id={self.user_id}, default={self.is_default})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id
