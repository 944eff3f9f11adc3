# Invite-link shares of a user's content snapshot
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID, as_utc

if TYPE_CHECKING:
    from .user import User
    from .version import Version


class ShareRecord(BaseModel):
    """Invite token granting preview access and bounded clone rights.

    ``clone_count`` only ever grows, one per successful clone, and never
    passes ``max_clones`` when that is set. Expiry and limit exhaustion are
    checked at use time; nothing sweeps old records.
    """

    __tablename__ = "share_records"

    owner_user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # NULL for shares issued before the owner had versions
    version_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("versions.id", ondelete="SET NULL"), nullable=True
    )

    invite_token: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    max_clones: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    clone_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    owner: Mapped["User"] = relationship("User", lazy="selectin")
    version: Mapped[Optional["Version"]] = relationship("Version", lazy="selectin")

    __table_args__ = (
        CheckConstraint("length(title) <= 200", name="ck_share_records_title_len"),
        CheckConstraint("clone_count >= 0", name="ck_share_records_clone_count"),
        CheckConstraint(
            "max_clones IS NULL OR clone_count <= max_clones", name="ck_share_records_clone_limit"
        ),
        Index("idx_share_records_owner", "owner_user_id"),
        Index("idx_share_records_token_active", "invite_token", "is_active"),
    )

    def __repr__(self) -> str:
        return (
            f"<ShareRecord(title='{self.title}', clones={self.clone_count}/{self.max_clones}, "
            f"active={self.is_active})>"
        )

    @classmethod
    def generate_invite_token(cls) -> str:
        """Generate cryptographically secure invite token."""
        return secrets.token_urlsafe(24)  # 192-bit token

    @classmethod
    def compute_expiry(cls, expires_in_days: Optional[int]) -> Optional[datetime]:
        """Expiry timestamp for a new share; no expiry when days is falsy."""
        if not expires_in_days:
            return None
        return datetime.now(timezone.utc) + timedelta(days=expires_in_days)

    @property
    def is_expired(self) -> bool:
        expires_at = as_utc(self.expires_at)
        if expires_at is None:
            return False
        return datetime.now(timezone.utc) > expires_at

    @property
    def is_limit_reached(self) -> bool:
        return self.max_clones is not None and self.clone_count >= self.max_clones

    @property
    def remaining_clones(self) -> Optional[int]:
        if self.max_clones is None:
            return None
        return max(0, self.max_clones - self.clone_count)

    @property
    def is_usable(self) -> bool:
        return self.is_active and not self.is_expired and not self.is_limit_reached

    def revoke(self) -> None:
        self.is_active = False
