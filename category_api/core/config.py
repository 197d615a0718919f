# category_api/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import validator
from typing import List

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from .env"""

    # === Project ===
    PROJECT_NAME: str = "Category Management API"
    VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # === Database ===
    DATABASE_URL: str = "sqlite+aiosqlite:///./category_management.db"
    DATABASE_ECHO: bool = False

    @validator("DATABASE_URL")
    def validate_database_url(cls, v):
        """Ensure database URL is safe for current environment"""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and ("localhost" in v or v.startswith("sqlite")):
            raise ValueError("🚨 Production environment cannot use a local database!")
        return v

    # === JWT ===
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    @validator("SECRET_KEY")
    def validate_secret_key(cls, v):
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and v == DEFAULT_SECRET_KEY:
            raise ValueError("🚨 SECRET_KEY must be set in production!")
        return v

    # === CORS ===
    ALLOWED_ORIGINS: List[str] = ["*"]
    ALLOWED_METHODS: List[str] = ["*"]
    ALLOWED_HEADERS: List[str] = ["*"]

    # === System ===
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    # === Security ===
    BCRYPT_ROUNDS: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Create a global settings instance
settings = Settings()
