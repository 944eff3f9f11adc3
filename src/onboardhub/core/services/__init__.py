"""
Service layer interfaces and implementations.

Services hold the business rules; they raise the errors in
``core.exceptions`` and never build HTTP responses.
"""

from .interfaces import (
    IAuthService,
    ICloneService,
    IHealthService,
    IResourceService,
    ISharingService,
    ITemplateService,
    IVersionService,
)

from .auth_service import AuthService
from .clone_service import CloneService
from .health_service import HealthService
from .resource_service import ResourceService
from .sharing_service import SharingService
from .template_service import TemplateService
from .version_service import VersionService

__all__ = [
    # Interfaces
    "IAuthService",
    "ITemplateService",
    "IResourceService",
    "IVersionService",
    "ISharingService",
    "ICloneService",
    "IHealthService",
    # Implementations
    "AuthService",
    "TemplateService",
    "ResourceService",
    "VersionService",
    "SharingService",
    "CloneService",
    "HealthService",
]
