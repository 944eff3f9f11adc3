"""Clone merge engine.

Copies a share's content into a target account. One engine instance
applies one merge policy:

``flat``
    Items land in the target's un-versioned space. Template items whose
    ``(title, period)`` already exist are skipped; categories are matched
    by label and only resources with a new ``(name, url)`` are merged in.
``versioned``
    A fresh version named after the share receives an unfiltered copy.

The clone slot is claimed with a conditional UPDATE in the same
transaction as the copied rows. Each row is inserted under its own
SAVEPOINT, so a failing row is logged and counted without aborting the
rest of the clone.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..exceptions import (
    LimitReachedError,
    NotFoundError,
    RequiresConfirmationError,
    SelfCloneError,
    StoreError,
)
from ..logging import get_logger
from ..repositories.resource_repository import ResourceRepository
from ..repositories.share_repository import ShareRepository
from ..repositories.template_repository import TemplateRepository
from ..repositories.user_repository import UserRepository
from ..repositories.version_repository import VersionRepository
from ..schemas.sharing import CloneResultResponse
from .interfaces import ICloneService
from .sharing_service import ensure_share_usable

logger = get_logger("services.clone")

FLAT = "flat"
VERSIONED = "versioned"
POLICIES = (FLAT, VERSIONED)


@dataclass
class _CategorySnapshot:
    category: str
    job: str
    situation: str
    outcome: str
    resources: List[Dict[str, str]]


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def build_clone_message(result: CloneResultResponse) -> str:
    """Human-readable summary of a clone."""
    details = []
    if result.templates_added:
        n = result.templates_added
        details.append(f"{n} new {_plural(n, 'template', 'templates')} added")
    if result.templates_skipped:
        n = result.templates_skipped
        details.append(f"{n} duplicate {_plural(n, 'template', 'templates')} skipped")
    if result.categories_added:
        n = result.categories_added
        details.append(f"{n} new {_plural(n, 'category', 'categories')} created")
    if result.categories_merged:
        n = result.categories_merged
        details.append(f"{n} {_plural(n, 'category', 'categories')} merged with existing")
    if result.resources_added:
        n = result.resources_added
        details.append(f"{n} new {_plural(n, 'resource', 'resources')} added")
    if result.resources_skipped:
        n = result.resources_skipped
        details.append(f"{n} duplicate {_plural(n, 'resource', 'resources')} skipped")

    failed = result.templates_failed + result.categories_failed + result.resources_failed
    if failed:
        details.append(f"{failed} {_plural(failed, 'item', 'items')} could not be copied")

    if result.version_name:
        message = f'Content successfully cloned into new version "{result.version_name}"!'
    else:
        message = "Content successfully merged into your account!"
    if details:
        message += " " + ", ".join(details) + "."
    return message


class CloneService(ICloneService):
    """Clone merge engine implementation."""

    def __init__(self, session: AsyncSession, policy: Optional[str] = None):
        self.session = session
        self.policy = policy or get_settings().clone_merge_policy
        if self.policy not in POLICIES:
            raise ValueError(f"Unknown clone merge policy: {self.policy}")

        self.share_repo = ShareRepository(session)
        self.user_repo = UserRepository(session)
        self.template_repo = TemplateRepository(session)
        self.resource_repo = ResourceRepository(session)
        self.version_repo = VersionRepository(session)

    async def clone_share(
        self, invite_token: str, target_user_id: UUID, confirmed: bool = False
    ) -> CloneResultResponse:
        """Perform at most one merge of the share's content into the target account."""
        share = ensure_share_usable(await self.share_repo.get_active_by_token(invite_token))
        share_id = share.id
        owner_id = share.owner_user_id
        source_version_id = share.version_id
        share_title = share.title
        share_description = share.description

        if owner_id == target_user_id:
            raise SelfCloneError()

        if not await self.user_repo.get_by_id(target_user_id):
            raise NotFoundError("User", target_user_id)

        if not confirmed:
            await self._confirmation_gate(target_user_id)

        # plain snapshots so savepoint rollbacks never expire what we iterate over
        templates = [
            {"period": t.period, "title": t.title, "priority": t.priority}
            for t in await self.template_repo.list_by_scope(owner_id, source_version_id)
        ]
        categories = [
            _CategorySnapshot(
                category=c.category,
                job=c.job,
                situation=c.situation,
                outcome=c.outcome,
                resources=[{"name": r.name, "type": r.type, "url": r.url} for r in c.resources],
            )
            for c in await self.resource_repo.list_by_scope(owner_id, source_version_id)
        ]

        result = CloneResultResponse(
            policy=self.policy,
            templates_processed=len(templates),
            categories_processed=len(categories),
            resources_processed=sum(len(c.resources) for c in categories),
        )

        try:
            if not await self.share_repo.claim_clone_slot(share_id):
                await self._raise_claim_failure(share_id)

            if self.policy == VERSIONED:
                await self._clone_into_new_version(
                    target_user_id, share_title, share_description, templates, categories, result
                )
            else:
                await self._flat_merge(target_user_id, templates, categories, result)

            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Clone of share {share_id} into user {target_user_id} failed: {e}")
            raise StoreError("Failed to clone shared content") from e

        refreshed = await self.share_repo.get_by_id(share_id)
        result.clone_count = refreshed.clone_count if refreshed else 0
        result.message = build_clone_message(result)

        logger.info(
            f"Cloned share {share_id} into user {target_user_id}",
            extra=result.model_dump(mode="json", exclude={"message"}),
        )
        return result

    async def _confirmation_gate(self, target_user_id: UUID) -> None:
        """Defer when the target already owns content; performs no writes."""
        template_count = await self.template_repo.count_for_user(target_user_id)
        category_count = await self.resource_repo.count_for_user(target_user_id)
        if template_count or category_count:
            raise RequiresConfirmationError(
                existing_data={
                    "templates": template_count > 0,
                    "resources": category_count > 0,
                    "template_count": template_count,
                    "category_count": category_count,
                }
            )

    async def _raise_claim_failure(self, share_id: UUID) -> None:
        """The conditional claim matched no row: report why."""
        await self.session.rollback()
        ensure_share_usable(await self.share_repo.get_by_id(share_id))
        # the record looked usable again after losing the race
        raise LimitReachedError()

    async def _flat_merge(
        self,
        target_user_id: UUID,
        templates: List[Dict[str, Any]],
        categories: List[_CategorySnapshot],
        result: CloneResultResponse,
    ) -> None:
        existing_keys = await self.template_repo.existing_keys(target_user_id)

        for template in templates:
            key = (template["title"], template["period"])
            if key in existing_keys:
                result.templates_skipped += 1
                continue
            if await self._copy_template(target_user_id, None, template):
                existing_keys.add(key)
                result.templates_added += 1
            else:
                result.templates_failed += 1

        # label -> (category id, known resource keys)
        targets: Dict[str, Tuple[UUID, set]] = {}
        for existing in await self.resource_repo.list_by_scope(target_user_id, None):
            targets.setdefault(
                existing.category, (existing.id, {r.dedup_key for r in existing.resources})
            )

        for category in categories:
            match = targets.get(category.category)
            if match is not None:
                category_id, resource_keys = match
                result.categories_merged += 1
                for resource in category.resources:
                    key = (resource["name"], resource["url"])
                    if key in resource_keys:
                        result.resources_skipped += 1
                        continue
                    if await self._copy_resource(category_id, resource):
                        resource_keys.add(key)
                        result.resources_added += 1
                    else:
                        result.resources_failed += 1
                continue

            category_id = await self._copy_category(target_user_id, None, category)
            if category_id is None:
                result.categories_failed += 1
                result.resources_failed += len(category.resources)
                continue

            result.categories_added += 1
            resource_keys = set()
            for resource in category.resources:
                if await self._copy_resource(category_id, resource):
                    resource_keys.add((resource["name"], resource["url"]))
                    result.resources_added += 1
                else:
                    result.resources_failed += 1
            targets[category.category] = (category_id, resource_keys)

    async def _clone_into_new_version(
        self,
        target_user_id: UUID,
        title: str,
        description: Optional[str],
        templates: List[Dict[str, Any]],
        categories: List[_CategorySnapshot],
        result: CloneResultResponse,
    ) -> None:
        await self.user_repo.lock_user(target_user_id)
        is_first = await self.version_repo.count_for_user(target_user_id) == 0
        version = await self.version_repo.add_version(
            {
                "user_id": target_user_id,
                "name": title[:100],
                "description": description[:500] if description else None,
                "is_default": is_first,
            }
        )
        result.version_id = version.id
        result.version_name = version.name

        for template in templates:
            if await self._copy_template(target_user_id, version.id, template):
                result.templates_added += 1
            else:
                result.templates_failed += 1

        for category in categories:
            category_id = await self._copy_category(target_user_id, version.id, category)
            if category_id is None:
                result.categories_failed += 1
                result.resources_failed += len(category.resources)
                continue
            result.categories_added += 1
            for resource in category.resources:
                if await self._copy_resource(category_id, resource):
                    result.resources_added += 1
                else:
                    result.resources_failed += 1

    async def _copy_template(
        self, user_id: UUID, version_id: Optional[UUID], template: Dict[str, Any]
    ) -> bool:
        try:
            async with self.session.begin_nested():
                await self.template_repo.add_item(
                    {
                        "user_id": user_id,
                        "version_id": version_id,
                        "period": template["period"],
                        "title": template["title"],
                        "priority": template["priority"],
                        "completed": False,
                    }
                )
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Failed to copy template '{template['title']}': {e}", exc_info=e)
            return False

    async def _copy_category(
        self, user_id: UUID, version_id: Optional[UUID], category: _CategorySnapshot
    ) -> Optional[UUID]:
        try:
            async with self.session.begin_nested():
                created = await self.resource_repo.add_category(
                    {
                        "user_id": user_id,
                        "version_id": version_id,
                        "category": category.category,
                        "job": category.job,
                        "situation": category.situation,
                        "outcome": category.outcome,
                    }
                )
            return created.id
        except SQLAlchemyError as e:
            logger.warning(f"Failed to copy category '{category.category}': {e}", exc_info=e)
            return None

    async def _copy_resource(self, category_id: UUID, resource: Dict[str, str]) -> bool:
        try:
            async with self.session.begin_nested():
                await self.resource_repo.add_resource({"category_id": category_id, **resource})
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Failed to copy resource '{resource['name']}': {e}", exc_info=e)
            return False
