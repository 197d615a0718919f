import logging
from typing import Optional, Dict, Any
from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from category_api.models.auth.user import User
from category_api.core.config import settings
from category_api.core.exceptions import UnauthorizedError
from category_api.core.security import verify_password, create_access_token
from category_api.schemas.auth.login import LoginRequest
from category_api.schemas.auth.user import UserCreate
from category_api.services.auth.user_service import UserService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

class AuthService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_service = UserService(session)

    async def register(self, user_create: UserCreate) -> Dict[str, Any]:
        """Register a new user and issue a token"""
        user = await self.user_service.create_user(user_create)
        return self.create_token_response(user)

    async def login(self, login_data: LoginRequest) -> Dict[str, Any]:
        """Check credentials and issue a token"""
        user = await self.authenticate_user(login_data.email, login_data.password)
        if not user:
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)
        return self.create_token_response(user)

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password"""
        user = await self.user_service.get_user_by_email(email)

        if not user or not user.is_active:
            logger.warning(f"Failed login for {email}: user not found or inactive")
            return None

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login for {email}: invalid password")
            return None

        logger.info(f"User {user.id} logged in")
        return user

    def create_token_response(self, user: User) -> Dict[str, Any]:
        """Create access token for user"""
        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = create_access_token(
            data={
                "sub": str(user.id),
                "email": user.email,
            },
            expires_delta=access_token_expires
        )
        return {
            "token": access_token,
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user": user,
        }
