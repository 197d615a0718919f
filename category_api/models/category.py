from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint, Enum as SQLEnum
from category_api.db.base import BaseModel
from category_api.models.shared.enums import CategoryStatus

class Category(BaseModel):
    __tablename__ = 'categories'
    __table_args__ = (
        # Sibling names are unique; roots (NULL parent) are checked by the service
        UniqueConstraint('parent_id', 'name', name='uq_categories_parent_name'),
    )

    name = Column(String(100), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey('categories.id'), nullable=True, index=True)
    status = Column(
        SQLEnum(
            CategoryStatus,
            name='category_status',
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=CategoryStatus.ACTIVE,
        index=True,
    )

    def __repr__(self):
        return f"<Category {self.id} {self.name!r} parent={self.parent_id} {self.status}>"
