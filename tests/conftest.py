"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from typing import Any

# Test settings must be in place before any application module is imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "test"

import httpx
import pytest
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

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.passwords import BcryptPasswordHasher
from infrastructure.database.models import Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET_KEY = "test-secret-key"

GITHUB_REPOS = [
    {"id": 1, "name": "hello-world", "html_url": "https://github.com/octocat/hello-world"},
    {"id": 2, "name": "spoon-knife", "html_url": "https://github.com/octocat/spoon-knife"},
]


def github_handler(request: httpx.Request) -> httpx.Response:
    """Fake GitHub API: only ``octocat`` exists."""
    if request.url.path == "/users/octocat/repos":
        return httpx.Response(200, json=GITHUB_REPOS)
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET_KEY,
        algorithm="HS256",
        expire_seconds=3600,
    )


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the per-test database.

    This client:
    - Uses an in-memory SQLite database
    - Signs and validates tokens with the test secret
    - Answers GitHub lookups from a mock transport
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_post_service,
        get_profile_service,
        get_user_service,
    )
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from infrastructure.github.client import GitHubClient
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    user_service = UserService(
        test_uow_factory,
        auth_provider=auth_provider,
        password_hasher=BcryptPasswordHasher(rounds=4),
    )
    profile_service = ProfileService(
        test_uow_factory,
        github_client=GitHubClient(
            base_url="https://api.github.test",
            transport=httpx.MockTransport(github_handler),
        ),
    )
    post_service = PostService(test_uow_factory)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_post_service] = lambda: post_service
    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


async def register_user(
    client: AsyncClient,
    name: str = "Alice",
    email: str = "alice@example.com",
    password: str = "secret1",
) -> str:
    """Register a user through the API and return their token."""
    response = await client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return str(response.json()["token"])


@pytest.fixture
async def alice_headers(client: AsyncClient) -> dict[str, str]:
    """Auth headers for a freshly registered user."""
    token = await register_user(client)
    return {"x-auth-token": token}


@pytest.fixture
async def bob_headers(client: AsyncClient) -> dict[str, str]:
    """Auth headers for a second user."""
    token = await register_user(client, name="Bob", email="bob@example.com")
    return {"x-auth-token": token}
