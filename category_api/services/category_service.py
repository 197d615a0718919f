import logging
from collections import deque
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from category_api.models.category import Category
from category_api.models.shared.enums import CategoryStatus
from category_api.repositories.category_repository import CategoryRepository
from category_api.schemas.category import CategoryCreate, CategoryUpdate, NAME_MAX_LENGTH, NAME_MIN_LENGTH
from category_api.core.exceptions import (
    ConflictError,
    InternalServerError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from category_api.core.logging_config import log_user_action
from category_api.utils.category_tree import build_category_tree

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Category with this name already exists under the same parent"
UNIQUE_NAME_CONSTRAINT = "uq_categories_parent_name"


def _violated_constraint(error: IntegrityError) -> str:
    """Classify an IntegrityError as 'unique_name', 'parent' or 'other'"""
    message = str(error.orig).lower()
    # Postgres names the constraint, SQLite names the columns
    if UNIQUE_NAME_CONSTRAINT in message or (
        "unique constraint failed" in message and "categories.name" in message
    ):
        return "unique_name"
    if "foreign key" in message:
        return "parent"
    return "other"


class CategoryService:
    def __init__(self, db: AsyncSession, repository: Optional[CategoryRepository] = None):
        self.db = db
        self.repository = repository or CategoryRepository(db)

    @asynccontextmanager
    async def _transaction(self):
        """Commit once at the end of a multi-step write, roll back on any failure"""
        try:
            yield
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            violated = _violated_constraint(e)
            logger.warning(f"Integrity error ({violated}) while writing categories: {str(e.orig)}")
            if violated == "unique_name":
                raise ConflictError(DUPLICATE_NAME_MESSAGE) from e
            if violated == "parent":
                raise NotFoundError("Parent category not found") from e
            raise
        except Exception:
            await self.db.rollback()
            raise

    async def create_category(self, category_data: CategoryCreate, current_user_id: Optional[int] = None) -> Category:
        self._validate(category_data.name, category_data.status)
        name = category_data.name.strip()
        status = category_data.status or CategoryStatus.ACTIVE

        # Check if parent exists if provided
        if category_data.parent_id is not None:
            parent = await self.repository.find_by_id(category_data.parent_id)
            if not parent:
                raise NotFoundError("Parent category not found")

            # A child of an inactive parent is always inactive
            if parent.status == CategoryStatus.INACTIVE:
                status = CategoryStatus.INACTIVE

        await self._ensure_unique_name(category_data.parent_id, name)

        category = Category(
            name=name,
            parent_id=category_data.parent_id,
            status=status,
        )
        async with self._transaction():
            category = await self.repository.insert(category)

        logger.info(f"Created category {category.id} '{category.name}' (parent={category.parent_id}, status={category.status.value})")
        if current_user_id is not None:
            log_user_action(current_user_id, "create", "category", category.id)
        return category

    async def get_category_tree(self) -> List[Dict[str, Any]]:
        """Get all categories as a forest ordered by name"""
        categories = await self.repository.find_all()
        return build_category_tree(categories)

    async def get_category_by_id(self, category_id: int) -> Category:
        category = await self.repository.find_by_id(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    async def update_category(self, category_id: int, category_data: CategoryUpdate, current_user_id: Optional[int] = None) -> Category:
        category = await self.get_category_by_id(category_id)
        changes = category_data.dict(exclude_unset=True)
        if "name" in changes or "status" in changes:
            self._validate(changes.get("name", category.name), changes.get("status"))

        update_fields: Dict[str, Any] = {}
        parent_id = category.parent_id
        parent_is_inactive = False

        if "parent_id" in changes:
            new_parent_id = changes["parent_id"]
            if new_parent_id is None:
                # Explicit null moves the category to the root level
                parent_id = None
            else:
                if new_parent_id == category.id:
                    raise InvalidOperationError("Category cannot be its own parent")

                parent = await self.repository.find_by_id(new_parent_id)
                if not parent:
                    raise NotFoundError("Parent category not found")

                if await self._is_descendant(parent, category.id):
                    raise InvalidOperationError("Category cannot be moved under one of its descendants")

                parent_id = parent.id
                parent_is_inactive = parent.status == CategoryStatus.INACTIVE
            update_fields["parent_id"] = parent_id

        # Check for duplicate name if name or parent is changing
        name = (changes.get("name") or category.name).strip()
        if name != category.name:
            update_fields["name"] = name
        if "name" in update_fields or parent_id != category.parent_id:
            await self._ensure_unique_name(parent_id, name, exclude_id=category.id)

        status = changes.get("status")
        if status == CategoryStatus.ACTIVE and "parent_id" not in changes and parent_id is not None:
            current_parent = await self.repository.find_by_id(parent_id)
            parent_is_inactive = current_parent is not None and current_parent.status == CategoryStatus.INACTIVE

        if parent_is_inactive:
            if status == CategoryStatus.ACTIVE:
                logger.info(f"Category {category.id} forced inactive: parent {parent_id} is inactive")
            status = CategoryStatus.INACTIVE

        if status is not None:
            update_fields["status"] = status

        async with self._transaction():
            if status == CategoryStatus.INACTIVE:
                cascaded = await self._cascade_status(category.id, CategoryStatus.INACTIVE)
                if cascaded:
                    logger.info(f"Deactivated {cascaded} descendants of category {category.id}")

            updated = await self.repository.update_by_id(category.id, update_fields)
            if updated is None:
                logger.error(f"Category {category.id} missing after update")
                raise InternalServerError("Category update failed")

        if current_user_id is not None:
            log_user_action(current_user_id, "update", "category", category.id)
        return updated

    async def delete_category(self, category_id: int, current_user_id: Optional[int] = None) -> Dict[str, Any]:
        category = await self.get_category_by_id(category_id)
        parent_id = category.parent_id

        children = await self.repository.find_by_parent(category.id)

        # Children join their grandparent's children; names must stay unique there
        if children:
            sibling_names = {
                sibling.name
                for sibling in await self.repository.find_by_parent(parent_id)
                if sibling.id != category.id
            }
            clashes = sorted(child.name for child in children if child.name in sibling_names)
            if clashes:
                raise ConflictError(
                    f"Cannot reassign subcategories, names already used under the parent: {', '.join(clashes)}"
                )

        async with self._transaction():
            if children:
                await self.repository.update_many_by_parent(category.id, {"parent_id": parent_id})
            await self.repository.delete_by_id(category.id)

        reassigned_count = len(children)
        logger.info(f"Deleted category {category_id}, {reassigned_count} subcategories reassigned to {parent_id}")
        if current_user_id is not None:
            log_user_action(current_user_id, "delete", "category", category_id)
        return {
            "message": f"Category deleted successfully. {reassigned_count} subcategories reassigned.",
            "reassigned_count": reassigned_count,
        }

    async def _cascade_status(self, root_id: int, status: CategoryStatus) -> int:
        """Set ``status`` on every descendant of ``root_id``, level by level"""
        queue = deque([root_id])
        visited = {root_id}
        updated = 0

        while queue:
            parent_id = queue.popleft()

            # Read before write: the bulk update doesn't report affected ids
            children = await self.repository.find_by_parent(parent_id)
            if not children:
                continue

            updated += await self.repository.update_many_by_parent(parent_id, {"status": status})

            for child in children:
                if child.id not in visited:
                    visited.add(child.id)
                    queue.append(child.id)

        return updated

    async def _is_descendant(self, candidate: Category, ancestor_id: int) -> bool:
        """True when ``ancestor_id`` appears in the parent chain of ``candidate``"""
        seen = set()
        parent_id = candidate.parent_id
        while parent_id is not None and parent_id not in seen:
            if parent_id == ancestor_id:
                return True
            seen.add(parent_id)
            parent = await self.repository.find_by_id(parent_id)
            parent_id = parent.parent_id if parent else None
        return False

    @staticmethod
    def _validate(name: Optional[str], status: Optional[CategoryStatus]):
        """Re-check payloads that did not go through request validation"""
        if not isinstance(name, str) or not NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH:
            raise ValidationError(
                f"Category name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        if status is not None and status not in set(CategoryStatus):
            raise ValidationError(f"Invalid category status: {status}")

    async def _ensure_unique_name(self, parent_id: Optional[int], name: str, exclude_id: Optional[int] = None):
        existing = await self.repository.find_by_parent_and_name(parent_id, name, exclude_id=exclude_id)
        if existing:
            raise ConflictError(DUPLICATE_NAME_MESSAGE)
