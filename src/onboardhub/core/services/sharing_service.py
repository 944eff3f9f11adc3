"""Share-link issuer and resolver."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..exceptions import (
    EmptyContentError,
    ExpiredError,
    LimitReachedError,
    NotFoundError,
    RateLimitedError,
    StoreError,
    ValidationError,
)
from ..logging import get_logger
from ..models.share_record import ShareRecord
from ..redis_client import get_redis_client
from ..repositories.resource_repository import ResourceRepository
from ..repositories.share_repository import ShareRepository
from ..repositories.template_repository import TemplateRepository
from ..repositories.user_repository import UserRepository
from ..schemas.resources import ResourceCategoryResponse
from ..schemas.sharing import (
    SharedContentResponse,
    ShareCreateRequest,
    ShareInfo,
    ShareLinkResponse,
    ShareListItem,
    ShareOwner,
)
from ..schemas.templates import TemplateItemResponse
from .interfaces import ISharingService
from .version_service import resolve_version_scope

logger = get_logger("services.sharing")

_TOKEN_ATTEMPTS = 3


def build_invite_url(invite_token: str, base_url: Optional[str] = None) -> str:
    """Public invite URL; ``public_base_url`` wins over the request origin."""
    settings = get_settings()
    origin = (settings.public_base_url or base_url or "").rstrip("/")
    path = settings.invite_path.strip("/")
    if not path:
        return f"{origin}/{invite_token}"
    return f"{origin}/{path}/{invite_token}"


def ensure_share_usable(share: Optional[ShareRecord]) -> ShareRecord:
    """Liveness checks shared by the resolver and the clone engine."""
    if share is None or not share.is_active:
        raise NotFoundError("Share", message="Invalid or expired invite link")
    if share.is_expired:
        raise ExpiredError()
    if share.is_limit_reached:
        raise LimitReachedError()
    return share


class SharingService(ISharingService):
    """Issues, resolves, lists and revokes invite links."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.share_repo = ShareRepository(session)
        self.user_repo = UserRepository(session)
        self.template_repo = TemplateRepository(session)
        self.resource_repo = ResourceRepository(session)
        self.settings = get_settings()

    async def issue_share(
        self, user_id: UUID, request: ShareCreateRequest, base_url: Optional[str] = None
    ) -> ShareLinkResponse:
        """Create a share record over the owner's content in one version scope."""
        title = (request.title or "").strip()
        if not title:
            raise ValidationError("Title is required")

        owner = await self.user_repo.get_by_id(user_id)
        if not owner:
            raise NotFoundError("User", user_id)

        scope = await resolve_version_scope(self.session, user_id, request.version_id)
        template_count = await self.template_repo.count_by_scope(user_id, scope)
        category_count = await self.resource_repo.count_by_scope(user_id, scope)
        if template_count == 0 and category_count == 0:
            raise EmptyContentError()

        invite_token = await self._new_invite_token()
        try:
            share = await self.share_repo.create_share(
                {
                    "owner_user_id": user_id,
                    "version_id": scope,
                    "invite_token": invite_token,
                    "title": title,
                    "description": request.description,
                    "expires_at": ShareRecord.compute_expiry(request.expires_in_days),
                    "max_clones": request.max_clones,
                    "clone_count": 0,
                    "is_active": True,
                }
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to create share for user {user_id}: {e}")
            raise StoreError("Failed to create share link") from e

        logger.info(
            f"Issued share {share.id} for user {user_id}",
            extra={
                "version_id": str(scope) if scope else None,
                "templates": template_count,
                "categories": category_count,
                "max_clones": request.max_clones,
            },
        )
        return ShareLinkResponse(
            share_id=share.id,
            invite_token=share.invite_token,
            invite_url=build_invite_url(share.invite_token, base_url),
            title=share.title,
            description=share.description,
            expires_at=share.expires_at,
            max_clones=share.max_clones,
        )

    async def resolve_share(self, invite_token: str) -> SharedContentResponse:
        """Read-only snapshot; never touches ``clone_count``."""
        share = ensure_share_usable(await self.share_repo.get_active_by_token(invite_token))
        owner = share.owner

        # legacy shares (no version) cover un-versioned content only
        scope = share.version_id
        templates = await self.template_repo.list_by_scope(share.owner_user_id, scope)
        categories = await self.resource_repo.list_by_scope(share.owner_user_id, scope)

        return SharedContentResponse(
            share_info=ShareInfo(
                title=share.title,
                description=share.description,
                owner=ShareOwner(name=owner.display_name, email=owner.email, avatar_url=owner.avatar_url),
                clone_count=share.clone_count,
                max_clones=share.max_clones,
                expires_at=share.expires_at,
                version_id=share.version_id,
                version_name=share.version.name if share.version else None,
                created_at=share.created_at,
            ),
            templates=[TemplateItemResponse.model_validate(t) for t in templates],
            resource_categories=[ResourceCategoryResponse.model_validate(c) for c in categories],
        )

    async def enforce_preview_rate_limit(self, client_key: str) -> None:
        """Fixed one-minute window per client; allowed when Redis is absent."""
        limit = self.settings.share_preview_rate_limit
        if limit <= 0:
            return
        count = await get_redis_client().increment_rate_limit(f"rate:share_preview:{client_key}", expire=60)
        if count > limit:
            logger.warning(f"Share preview rate limit hit for {client_key}")
            raise RateLimitedError()

    async def list_shares(self, user_id: UUID, base_url: Optional[str] = None) -> List[ShareListItem]:
        shares = await self.share_repo.list_by_owner(user_id)
        return [
            ShareListItem(
                share_id=share.id,
                invite_token=share.invite_token,
                invite_url=build_invite_url(share.invite_token, base_url),
                title=share.title,
                description=share.description,
                expires_at=share.expires_at,
                max_clones=share.max_clones,
                version_id=share.version_id,
                clone_count=share.clone_count,
                is_active=share.is_active,
                is_expired=share.is_expired,
                created_at=share.created_at,
            )
            for share in shares
        ]

    async def revoke_share(self, user_id: UUID, share_id: UUID) -> bool:
        """Deactivate a share owned by the user."""
        if not await self.share_repo.deactivate_share(share_id, user_id):
            raise NotFoundError("Share", share_id)
        logger.info(f"Revoked share {share_id} of user {user_id}")
        return True

    async def _new_invite_token(self) -> str:
        for _ in range(_TOKEN_ATTEMPTS):
            token = ShareRecord.generate_invite_token()
            if not await self.share_repo.token_exists(token):
                return token
        raise StoreError("Could not allocate a unique invite token")
