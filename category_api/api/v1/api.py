from fastapi import APIRouter
from category_api.api.v1.endpoints import auth, categories

api_router = APIRouter()

# Authentication routes
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Category routes
api_router.include_router(categories.router, prefix="/category", tags=["Category"])
