"""Test fixtures — a fresh database per test, HTTP clients with auth overrides.

Each test gets its own engine on an in-memory SQLite database (aiosqlite,
StaticPool so every session shares the one connection) with the schema
created from the models. Set STOREFRONT_TEST_DATABASE_URL to run the same
suite against PostgreSQL; tables are dropped after each test.

Auth: `client` runs the real session pipeline (anonymous unless a test
logs in). `user_client` / `admin_client` override get_current_user_optional
with a fixed principal, so view and API tests don't need to log in first.
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from storefront.auth.dependencies import CurrentUser, get_current_user_optional
from storefront.config import settings
from storefront.db.engine import get_db
from storefront.db.models import Base
from storefront.main import app

TEST_DB_URL = os.environ.get(
    "STOREFRONT_TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:"
)


@pytest_asyncio.fixture()
async def engine():
    options = {"poolclass": StaticPool} if TEST_DB_URL.startswith("sqlite") else {}
    engine = create_async_engine(TEST_DB_URL, echo=False, **options)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    """Thumbnails land in a per-test directory."""
    path = tmp_path / "img"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


def _as(rol: str) -> CurrentUser:
    return CurrentUser(
        id="65a1f0c2e4b0a1b2c3d4e5f6",
        first_name="Ada",
        email="ada@example.com",
        rol=rol,
    )


async def _client(session_factory, principal=None):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    if principal is not None:
        app.dependency_overrides[get_current_user_optional] = lambda: principal

    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture()
async def client(session_factory):
    """Anonymous client running the real session pipeline."""
    async with await _client(session_factory) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def user_client(session_factory):
    async with await _client(session_factory, _as("USER")) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def admin_client(session_factory):
    async with await _client(session_factory, _as("ADMIN")) as ac:
        yield ac
    app.dependency_overrides.clear()
