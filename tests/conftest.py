"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

# Test settings must be in place before the application modules are imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def app(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """
    Create the application wired to the test database.

    Services are overridden to use the in-memory SQLite database and the
    test auth provider. The token gate itself is not overridden, so requests
    must carry a real token.
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import (
        get_post_service,
        get_profile_service,
        get_user_service,
    )
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from main import create_app

    app = create_app()

    post_service = PostService(uow_factory)
    profile_service = ProfileService(uow_factory)
    user_service = UserService(uow_factory, auth_provider)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_post_service] = lambda: post_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_user_service] = lambda: user_service

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no token)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def register_user(
    client: AsyncClient,
    name: str = "Alice",
    email: str = "alice@example.com",
    password: str = "secret123",
) -> dict[str, str]:
    """Register through the API and return headers carrying the token."""
    response = await client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"x-auth-token": response.json()["token"]}


@pytest.fixture
async def alice_headers(client: AsyncClient) -> dict[str, str]:
    """Token headers for a registered user named Alice."""
    return await register_user(client)


@pytest.fixture
async def bob_headers(client: AsyncClient) -> dict[str, str]:
    """Token headers for a second registered user named Bob."""
    return await register_user(client, name="Bob", email="bob@example.com")
