"""
Domain errors for OnboardHub.

Services raise these instead of building HTTP responses; the handlers in
``main.py`` turn them into the ``{"success": false, "error": ...}`` envelope
using ``status_code``.
"""

from typing import Any, Dict, Optional


class OnboardHubError(Exception):
    """Base domain error."""

    status_code: int = 500

    def __init__(self, message: str = "Unexpected error"):
        self.message = message
        super().__init__(message)


class ValidationError(OnboardHubError):
    """Missing or empty required field."""

    status_code = 400


class EmptyContentError(OnboardHubError):
    """Nothing to share in the requested scope."""

    status_code = 400

    def __init__(self, message: str = "No templates or resources to share"):
        super().__init__(message)


class SelfCloneError(OnboardHubError):
    """Owner tried to clone their own share."""

    status_code = 400

    def __init__(self, message: str = "Cannot clone your own shared content"):
        super().__init__(message)


class CannotDeleteDefaultError(OnboardHubError):
    """The default version cannot be deleted."""

    status_code = 400

    def __init__(self, message: str = "Cannot delete the default version"):
        super().__init__(message)


class AuthenticationError(OnboardHubError):
    """Bad or missing credentials."""

    status_code = 401


class PermissionDeniedError(OnboardHubError):
    """Authenticated, but acting on someone else's data."""

    status_code = 403


class NotFoundError(OnboardHubError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: Any = None, message: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        if message is None:
            message = f"{resource} not found" if identifier is None else f"{resource} not found: {identifier}"
        super().__init__(message)


class ConflictError(OnboardHubError):
    """Unique value already taken."""

    status_code = 409


class ExpiredError(OnboardHubError):
    """Invite link past its expiry."""

    status_code = 410

    def __init__(self, message: str = "Invite link has expired"):
        super().__init__(message)


class LimitReachedError(OnboardHubError):
    """Invite link has been cloned max_clones times."""

    status_code = 410

    def __init__(self, message: str = "Maximum number of clones reached"):
        super().__init__(message)


class RateLimitedError(OnboardHubError):
    status_code = 429

    def __init__(self, message: str = "Too many requests"):
        super().__init__(message)


class StoreError(OnboardHubError):
    """Persistence failure."""

    status_code = 500


class RequiresConfirmationError(OnboardHubError):
    """Deferred decision, not a failure.

    Returned (with HTTP 200) when a clone would land in an account that
    already holds data and the caller has not confirmed. No writes happen
    before this is raised.
    """

    status_code = 200

    def __init__(
        self,
        existing_data: Dict[str, Any],
        message: str = (
            "You already have existing templates and resource data. "
            "Cloning will add the shared content to your existing data."
        ),
    ):
        self.existing_data = existing_data
        super().__init__(message)
