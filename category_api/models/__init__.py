from category_api.models.auth.user import User
from category_api.models.category import Category
from category_api.models.shared.enums import CategoryStatus

__all__ = ["Category", "CategoryStatus", "User"]
