import os

# Configure settings before the application is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from category_api.main import app
from category_api.core.database import get_async_session
from category_api.db.base import Base
import category_api.models  # noqa: F401

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_USER = {
    "name": "Test User",
    "email": "test@example.com",
    "password": "Password123",
}


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the test database"""
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict:
    """Register a user and return its bearer header"""
    response = await client.post("/api/v1/auth/register", json=TEST_USER)
    token = response.json()["token"]

    return {"Authorization": f"Bearer {token}"}
