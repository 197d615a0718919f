import logging
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from category_api.core.database import get_async_session
from category_api.core.exceptions import UnauthorizedError
from category_api.auth.jwt_handler import decode_access_token
from category_api.models.auth.user import User
from category_api.services.auth.user_service import UserService

# auto_error=False so a missing header is a 401 rather than FastAPI's 403
security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: AsyncSession = Depends(get_async_session)
) -> User:
    """Get current authenticated user"""
    if credentials is None:
        raise UnauthorizedError("Access denied. No token provided")

    # Decode token
    token_data = decode_access_token(credentials.credentials)
    if token_data is None:
        raise UnauthorizedError("Invalid or expired token")

    try:
        user_id = int(token_data.sub)
    except ValueError:
        raise UnauthorizedError("Invalid or expired token")

    # Get user from database
    user_service = UserService(session)
    user = await user_service.get_user(user_id)

    if user is None or not user.is_active:
        logger.warning(f"Token for unknown or inactive user {user_id}")
        raise UnauthorizedError("User not found or inactive")

    # Add request info to context
    request.state.current_user = user

    return user
