"""API routers for OnboardHub."""

from .auth import router as auth_router
from .health import router as health_router
from .resources import router as resources_router
from .sharing import router as sharing_router
from .templates import router as templates_router
from .versions import router as versions_router

__all__ = [
    "auth_router",
    "templates_router",
    "resources_router",
    "versions_router",
    "sharing_router",
    "health_router",
]
