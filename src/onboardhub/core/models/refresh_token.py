# Opaque refresh tokens, consumed on rotation
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID, as_utc

if TYPE_CHECKING:
    from .user import User


class RefreshToken(BaseModel):
    """Server-side half of a login session; deleted when rotated or on logout."""

    __tablename__ = "refresh_tokens"

    token: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="refresh_tokens")

    __table_args__ = (
        Index("idx_refresh_tokens_user_id", "user_id"),
        Index("idx_refresh_tokens_user_active", "user_id", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<RefreshToken(user_id={self.user_id}, active={self.is_active})>"

    @classmethod
    def create_for_user(cls, user_id: uuid.UUID, expires_days: int = 7) -> "RefreshToken":
        return cls(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            is_active=True,
            expires_at=datetime.now(timezone.utc) + timedelta(days=expires_days),
        )

    @property
    def is_expired(self) -> bool:
        expires_at = as_utc(self.expires_at)
        return expires_at is None or datetime.now(timezone.utc) > expires_at

    @property
    def is_valid(self) -> bool:
        return self.is_active and not self.is_expired
