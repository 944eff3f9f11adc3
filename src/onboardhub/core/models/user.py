"""
User model for authentication.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .refresh_token import RefreshToken


class User(BaseModel):
    """User account. Owns templates, resource categories, versions and shares."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    avatar_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # NULL for accounts created through an external identity provider
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    refresh_tokens: Mapped[List["RefreshToken"]] = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        # Enforce max lengths at DB level (SQLite compatible)
        CheckConstraint("length(email) <= 255", name="ck_users_email_len"),
        CheckConstraint("length(name) <= 100", name="ck_users_name_len"),
        Index("idx_users_email", "email"),
        Index("idx_users_active", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}')>"

    @classmethod
    def normalize_email(cls, email: str) -> str:
        return email.strip().lower()

    @property
    def display_name(self) -> str:
        """Get display name."""
        return self.name or self.email.split("@")[0]

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def can_login(self) -> bool:
        """Check if user can login with a password."""
        return self.is_active and self.has_password
