"""Version manager.

Keeps the "exactly one default version per user" invariant: the first
version becomes default, default changes run unset-all-then-set-one under
a row lock on the user, and the default can never be deleted.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import CannotDeleteDefaultError, NotFoundError, StoreError
from ..logging import get_logger
from ..models.version import Version
from ..repositories.resource_repository import ResourceRepository
from ..repositories.share_repository import ShareRepository
from ..repositories.template_repository import TemplateRepository
from ..repositories.user_repository import UserRepository
from ..repositories.version_repository import VersionRepository
from ..schemas.versions import VersionCreate, VersionResponse, VersionUpdate
from .interfaces import IVersionService
from .provisioning import seed_default_content

logger = get_logger("services.versions")


async def resolve_version_scope(
    session: AsyncSession, user_id: UUID, version_id: Optional[UUID]
) -> Optional[UUID]:
    """Version a request operates on.

    An explicit id must belong to the user. Without one the user's default
    version is used, or ``None`` (un-versioned content) when the user has
    no versions yet.
    """
    repo = VersionRepository(session)
    if version_id is not None:
        version = await repo.get_by_id_and_user(version_id, user_id)
        if not version:
            raise NotFoundError("Version", version_id)
        return version.id

    default = await repo.get_default(user_id)
    return default.id if default else None


async def copy_version_content(
    session: AsyncSession, user_id: UUID, source_version_id: UUID, target_version_id: UUID
) -> dict:
    """Stage a full duplicate of one version's content into another; caller commits."""
    template_repo = TemplateRepository(session)
    resource_repo = ResourceRepository(session)
    counts = {"templates": 0, "categories": 0, "resources": 0}

    for item in await template_repo.list_by_scope(user_id, source_version_id):
        await template_repo.add_item(
            {
                "user_id": user_id,
                "version_id": target_version_id,
                "period": item.period,
                "title": item.title,
                "priority": item.priority,
                "completed": item.completed,
            }
        )
        counts["templates"] += 1

    for category in await resource_repo.list_by_scope(user_id, source_version_id):
        new_category = await resource_repo.add_category(
            {
                "user_id": user_id,
                "version_id": target_version_id,
                "category": category.category,
                "job": category.job,
                "situation": category.situation,
                "outcome": category.outcome,
            }
        )
        counts["categories"] += 1
        for resource in category.resources:
            await resource_repo.add_resource(
                {
                    "category_id": new_category.id,
                    "name": resource.name,
                    "type": resource.type,
                    "url": resource.url,
                }
            )
            counts["resources"] += 1

    return counts


class VersionService(IVersionService):
    """Version manager implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.version_repo = VersionRepository(session)
        self.user_repo = UserRepository(session)
        self.template_repo = TemplateRepository(session)
        self.resource_repo = ResourceRepository(session)
        self.share_repo = ShareRepository(session)

    async def list_versions(self, user_id: UUID) -> List[VersionResponse]:
        versions = await self.version_repo.list_for_user(user_id)
        counts = await self.version_repo.content_counts(user_id)
        return [self._to_response(v, counts.get(v.id)) for v in versions]

    async def create_version(self, user_id: UUID, request: VersionCreate) -> VersionResponse:
        """Create a version; duplicate a source version or seed baseline content."""
        try:
            if not await self.user_repo.lock_user(user_id):
                raise NotFoundError("User", user_id)

            source: Optional[Version] = None
            if request.copy_from_version_id is not None:
                source = await self.version_repo.get_by_id_and_user(request.copy_from_version_id, user_id)
                if not source:
                    raise NotFoundError("Version", request.copy_from_version_id)

            is_first = await self.version_repo.count_for_user(user_id) == 0
            version = await self.version_repo.add_version(
                {
                    "user_id": user_id,
                    "name": request.name,
                    "description": request.description,
                    "is_default": is_first,
                }
            )

            if source is not None:
                counts = await copy_version_content(self.session, user_id, source.id, version.id)
            else:
                counts = await seed_default_content(self.session, user_id, version.id)

            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to create version for user {user_id}: {e}")
            raise StoreError("Failed to create version") from e
        except NotFoundError:
            await self.session.rollback()
            raise

        logger.info(
            f"Created version {version.id} for user {user_id}",
            extra={"copied_from": str(source.id) if source else None, **counts},
        )
        return self._to_response(
            version, {"template_count": counts["templates"], "category_count": counts["categories"]}
        )

    async def update_version(self, user_id: UUID, version_id: UUID, request: VersionUpdate) -> VersionResponse:
        update_data = request.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in update_data:
            update_data["name"] = update_data["name"].strip()

        if update_data:
            version = await self.version_repo.update_version(version_id, user_id, update_data)
        else:
            version = await self.version_repo.get_by_id_and_user(version_id, user_id)
        if not version:
            raise NotFoundError("Version", version_id)

        counts = await self.version_repo.content_counts(user_id)
        return self._to_response(version, counts.get(version.id))

    async def set_default(self, user_id: UUID, version_id: UUID) -> VersionResponse:
        """Unset every default of the user, then set one, in one transaction."""
        try:
            # row lock serializes concurrent default changes of the same user
            if not await self.user_repo.lock_user(user_id):
                raise NotFoundError("User", user_id)

            version = await self.version_repo.get_by_id_and_user(version_id, user_id)
            if not version:
                raise NotFoundError("Version", version_id)

            await self.version_repo.unset_defaults(user_id)
            await self.version_repo.mark_default(version_id, user_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to set default version {version_id}: {e}")
            raise StoreError("Failed to set default version") from e
        except NotFoundError:
            await self.session.rollback()
            raise

        await self.session.refresh(version)
        logger.info(f"Version {version_id} is now default for user {user_id}")
        counts = await self.version_repo.content_counts(user_id)
        return self._to_response(version, counts.get(version.id))

    async def delete_version(self, user_id: UUID, version_id: UUID) -> bool:
        """Delete a version with its content; shares bound to it are deactivated."""
        version = await self.version_repo.get_by_id_and_user(version_id, user_id)
        if not version:
            raise NotFoundError("Version", version_id)
        if version.is_default:
            raise CannotDeleteDefaultError()

        try:
            revoked = await self.share_repo.deactivate_for_version(user_id, version_id)
            await self.resource_repo.delete_by_version(user_id, version_id)
            await self.template_repo.delete_by_version(user_id, version_id)
            await self.version_repo.delete_version(version)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to delete version {version_id}: {e}")
            raise StoreError("Failed to delete version") from e

        logger.info(f"Deleted version {version_id} of user {user_id}, {revoked} share(s) deactivated")
        return True

    def _to_response(self, version: Version, counts: Optional[dict] = None) -> VersionResponse:
        counts = counts or {}
        return VersionResponse(
            id=version.id,
            user_id=version.user_id,
            name=version.name,
            description=version.description,
            is_default=version.is_default,
            template_count=counts.get("template_count", 0),
            category_count=counts.get("category_count", 0),
            created_at=version.created_at,
            updated_at=version.updated_at,
        )
