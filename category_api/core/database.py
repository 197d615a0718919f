# category_api/core/database.py
from typing import Any, AsyncIterator, Dict
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from category_api.core.config import settings


def get_engine_options(database_url: str) -> Dict[str, Any]:
    """Pool options per backend; SQLite does not take pool sizing arguments"""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 20,
        "max_overflow": 30,
        "pool_timeout": 60,
        "pool_recycle": 3600,   # Recycle connections every hour
        "pool_pre_ping": True,
    }


database_url = settings.DATABASE_URL

engine = create_async_engine(
    database_url,
    echo=settings.DATABASE_ECHO,
    future=True,
    **get_engine_options(database_url),
)

async_session_maker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

async def get_async_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        yield session
