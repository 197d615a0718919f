import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from category_api.api.dependencies import get_current_user
from category_api.core.database import get_async_session
from category_api.services.category_service import CategoryService
from category_api.schemas.category import (
    Category,
    CategoryCreate,
    CategoryDeleteResponse,
    CategoryNode,
    CategoryUpdate,
)
from category_api.models.auth.user import User

router = APIRouter()
logger = logging.getLogger(__name__)

def _internal_error(action: str, error: Exception) -> HTTPException:
    logger.exception(f"Error trying to {action}: {str(error)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error"
    )

@router.post("/", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Create a new category"""
    try:
        service = CategoryService(db)
        return await service.create_category(category_data, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("create category", e)

@router.get("/", response_model=List[CategoryNode])
async def get_category_tree(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Get all categories as a tree"""
    try:
        service = CategoryService(db)
        return await service.get_category_tree()
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("build category tree", e)

@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Get category by ID"""
    try:
        service = CategoryService(db)
        return await service.get_category_by_id(category_id)
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error(f"get category {category_id}", e)

@router.put("/{category_id}", response_model=Category)
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Update category; deactivating it deactivates every subcategory"""
    try:
        service = CategoryService(db)
        return await service.update_category(category_id, category_data, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error(f"update category {category_id}", e)

@router.delete("/{category_id}", response_model=CategoryDeleteResponse)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Delete category and move its subcategories up to its parent"""
    try:
        service = CategoryService(db)
        return await service.delete_category(category_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error(f"delete category {category_id}", e)
