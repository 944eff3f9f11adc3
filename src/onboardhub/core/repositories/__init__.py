"""Repository layer for data access."""

from .refresh_token_repository import RefreshTokenRepository
from .resource_repository import ResourceRepository
from .share_repository import ShareRepository
from .template_repository import TemplateRepository, version_scope
from .user_repository import UserRepository
from .version_repository import VersionRepository

__all__ = [
    "UserRepository",
    "TemplateRepository",
    "ResourceRepository",
    "VersionRepository",
    "ShareRepository",
    "RefreshTokenRepository",
    "version_scope",
]
