"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from eventcatalog.db.base import Base
# Import all models to register with Base.metadata
import eventcatalog.db.models  # noqa: F401


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB."""
    from eventcatalog.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    return _app


@pytest.fixture
async def client(app):
    """Anonymous async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def user(db_session):
    """A persisted user row."""
    from eventcatalog.repositories.user_repo import UserRepository

    row = await UserRepository(db_session).create(
        user_id="usr_test0001",
        email="tester@example.com",
        handle="tester",
        hashed_password=None,
    )
    await db_session.commit()
    return row


@pytest.fixture
async def auth_client(app, user):
    """Async HTTP client carrying a valid access token for ``user``."""
    from eventcatalog.api.routes.auth import make_tokens

    access_token, _ = make_tokens(user.user_id, user.email)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {access_token}"},
    ) as ac:
        yield ac


@pytest.fixture
async def project(auth_client):
    """A project created through the API."""
    response = await auth_client.post("/api/v1/projects", json={"name": "Shop", "description": "test shop"})
    assert response.status_code == 201
    return response.json()
