from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime

from category_api.models.shared.enums import CategoryStatus

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


def _strip_name(v):
    return v.strip() if isinstance(v, str) else v


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    parent_id: Optional[int] = None
    status: Optional[CategoryStatus] = None

    @validator('name', pre=True)
    def strip_name(cls, v):
        return _strip_name(v)

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(BaseModel):
    """Partial update.

    ``parent_id`` is tri-state: leaving it out keeps the current parent,
    sending ``null`` turns the category into a root, and sending an id moves
    the category under that parent.
    """
    name: Optional[str] = Field(None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    parent_id: Optional[int] = None
    status: Optional[CategoryStatus] = None

    @validator('name', pre=True)
    def strip_name(cls, v):
        return _strip_name(v)

class Category(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    status: CategoryStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Tree view: the parent is encoded by position, so no parent_id here
class CategoryNode(BaseModel):
    id: int
    name: str
    status: CategoryStatus
    children: List["CategoryNode"] = Field(default_factory=list)

CategoryNode.model_rebuild()

class CategoryDeleteResponse(BaseModel):
    message: str
    reassigned_count: int
