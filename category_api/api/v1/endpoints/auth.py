import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from category_api.api.dependencies import get_current_user
from category_api.core.database import get_async_session
from category_api.models.auth.user import User
from category_api.schemas.auth.login import AuthResponse, LoginRequest
from category_api.schemas.auth.user import UserCreate, UserInDB
from category_api.services.auth.auth_service import AuthService

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_create: UserCreate,
    session: AsyncSession = Depends(get_async_session)
):
    """Register a new user"""
    try:
        auth_service = AuthService(session)
        return await auth_service.register(user_create)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Registration error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )

@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    session: AsyncSession = Depends(get_async_session)
):
    """Authenticate user and return an access token"""
    try:
        auth_service = AuthService(session)
        return await auth_service.login(login_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Login error: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed")

@router.get("/me", response_model=UserInDB)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user
