"""Template item repository for database operations."""

from typing import List, Optional, Set, Tuple
from uuid import UUID

from sqlalchemy import and_, case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.template_item import PERIOD_ORDER, TemplateItem


def version_scope(column, version_id: Optional[UUID]):
    """Filter for one version, or for un-versioned (legacy) rows when None."""
    if version_id is None:
        return column.is_(None)
    return column == version_id


_period_rank = case(PERIOD_ORDER, value=TemplateItem.period, else_=len(PERIOD_ORDER))


class TemplateRepository:
    """Repository for template item database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_item(self, item_data: dict) -> TemplateItem:
        """Create new template item."""
        item = TemplateItem(**item_data)
        self.session.add(item)
        await self.session.commit()
        await self.session.refresh(item)
        return item

    async def add_item(self, item_data: dict) -> TemplateItem:
        """Stage a template item in the current transaction."""
        item = TemplateItem(**item_data)
        self.session.add(item)
        await self.session.flush()
        return item

    async def get_by_id_and_user(self, item_id: UUID, user_id: UUID) -> Optional[TemplateItem]:
        stmt = select(TemplateItem).where(
            and_(TemplateItem.id == item_id, TemplateItem.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_scope(self, user_id: UUID, version_id: Optional[UUID]) -> List[TemplateItem]:
        """List items of one version (or legacy items), ordered by period then creation."""
        stmt = (
            select(TemplateItem)
            .where(
                and_(
                    TemplateItem.user_id == user_id,
                    version_scope(TemplateItem.version_id, version_id),
                )
            )
            .order_by(_period_rank, TemplateItem.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def update_item(self, item_id: UUID, user_id: UUID, update_data: dict) -> Optional[TemplateItem]:
        """Update item if owned by user."""
        item = await self.get_by_id_and_user(item_id, user_id)
        if not item:
            return None

        for key, value in update_data.items():
            setattr(item, key, value)

        await self.session.commit()
        await self.session.refresh(item)
        return item

    async def delete_item(self, item_id: UUID, user_id: UUID) -> bool:
        """Delete item if owned by user."""
        item = await self.get_by_id_and_user(item_id, user_id)
        if not item:
            return False

        await self.session.delete(item)
        await self.session.commit()
        return True

    async def count_by_scope(self, user_id: UUID, version_id: Optional[UUID]) -> int:
        stmt = select(func.count(TemplateItem.id)).where(
            and_(
                TemplateItem.user_id == user_id,
                version_scope(TemplateItem.version_id, version_id),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_for_user(self, user_id: UUID) -> int:
        """Count every item the user owns, in any version."""
        stmt = select(func.count(TemplateItem.id)).where(TemplateItem.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def existing_keys(self, user_id: UUID) -> Set[Tuple[str, str]]:
        """(title, period) pairs across every version of an account."""
        stmt = select(TemplateItem.title, TemplateItem.period).where(TemplateItem.user_id == user_id)
        result = await self.session.execute(stmt)
        return {(title, period) for title, period in result.all()}

    async def delete_by_version(self, user_id: UUID, version_id: UUID) -> int:
        """Remove every item of a version; caller commits."""
        stmt = delete(TemplateItem).where(
            and_(TemplateItem.user_id == user_id, TemplateItem.version_id == version_id)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete_for_user(self, user_id: UUID) -> int:
        stmt = delete(TemplateItem).where(TemplateItem.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.rowcount
