"""
Persistence adapter for categories.

All writes only ``flush``; committing is left to the caller so a multi-step
operation (cascade, delete with reassignment) runs in one transaction.
"""
from typing import Any, Dict, List, Optional
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from category_api.models.category import Category


class CategoryRepository:
    """SQLAlchemy implementation of category data access."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, category_id: int) -> Optional[Category]:
        """Find a category by ID, reloading it if already in the session."""
        result = await self.session.execute(
            select(Category)
            .where(Category.id == category_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_all(self) -> List[Category]:
        """All categories ordered by name."""
        result = await self.session.execute(
            select(Category).order_by(Category.name, Category.id)
        )
        return list(result.scalars().all())

    async def find_by_parent(self, parent_id: Optional[int]) -> List[Category]:
        """Direct children of ``parent_id``; roots when it is None."""
        result = await self.session.execute(
            select(Category)
            .where(self._parent_clause(parent_id))
            .order_by(Category.name, Category.id)
        )
        return list(result.scalars().all())

    async def find_by_parent_and_name(
        self,
        parent_id: Optional[int],
        name: str,
        exclude_id: Optional[int] = None
    ) -> Optional[Category]:
        query = select(Category).where(
            self._parent_clause(parent_id),
            Category.name == name,
        )
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def insert(self, category: Category) -> Category:
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def update_by_id(self, category_id: int, fields: Dict[str, Any]) -> Optional[Category]:
        """Apply ``fields`` in one UPDATE and return the refreshed row."""
        if fields:
            await self.session.execute(
                update(Category)
                .where(Category.id == category_id)
                .values(**fields)
            )
            await self.session.flush()
        return await self.find_by_id(category_id)

    async def update_many_by_parent(self, parent_id: Optional[int], fields: Dict[str, Any]) -> int:
        """Bulk update every direct child of ``parent_id``. Returns affected row count."""
        result = await self.session.execute(
            update(Category)
            .where(self._parent_clause(parent_id))
            .values(**fields)
        )
        await self.session.flush()
        return result.rowcount

    async def delete_by_id(self, category_id: int) -> int:
        result = await self.session.execute(
            delete(Category).where(Category.id == category_id)
        )
        await self.session.flush()
        return result.rowcount

    @staticmethod
    def _parent_clause(parent_id: Optional[int]):
        if parent_id is None:
            return Category.parent_id.is_(None)
        return Category.parent_id == parent_id
