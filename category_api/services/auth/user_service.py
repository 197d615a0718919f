import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from category_api.models.auth.user import User
from category_api.core.exceptions import ConflictError
from category_api.core.security import get_password_hash
from category_api.schemas.auth.user import UserCreate

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def create_user(self, user_create: UserCreate) -> User:
        """Create new user"""
        # Check if email already exists
        existing_user = await self.get_user_by_email(user_create.email)
        if existing_user:
            raise ConflictError("User with this email already exists")

        user = User(
            email=user_create.email.lower(),
            name=user_create.name,
            hashed_password=get_password_hash(user_create.password),
            is_active=True,
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("User with this email already exists") from e
        await self.session.refresh(user)

        logger.info(f"New user registered: {user.email}")
        return user
