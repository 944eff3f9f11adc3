"""
Database models for OnboardHub.

SQLAlchemy ORM models that define the database schema. All models are
designed for async sessions; relationships that are read outside of
explicit ``selectinload`` queries are loaded eagerly.

Models included:
    - User: account with email login and optional password
    - Version: named, user-scoped partition of content
    - TemplateItem: onboarding checklist task in a period bucket
    - ResourceCategory / Resource: job-story categories and their links
    - ShareRecord: invite-link share with expiry and clone limit
    - RefreshToken: JWT refresh token management
"""

from .base import BaseModel
from .refresh_token import RefreshToken
from .resource import Resource, ResourceCategory, ResourceType
from .share_record import ShareRecord
from .template_item import Period, Priority, TemplateItem
from .user import User
from .version import Version

__all__ = [
    "BaseModel",
    "User",
    "Version",
    "TemplateItem",
    "Period",
    "Priority",
    "ResourceCategory",
    "Resource",
    "ResourceType",
    "ShareRecord",
    "RefreshToken",
]
