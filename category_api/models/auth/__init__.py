from category_api.models.auth.user import User

__all__ = ["User"]
