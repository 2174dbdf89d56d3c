"""Admin-only user listing."""

import pytest

from storefront.schemas.user import UserCreate
from storefront.services.user_service import UserService


@pytest.mark.asyncio
async def test_list_users_as_admin(admin_client, db_session):
    svc = UserService(db_session)
    for i in range(3):
        await svc.register(UserCreate(
            first_name=f"U{i}", email=f"u{i}@example.com", password="password-123",
        ))

    r = await admin_client.get("/api/users", params={"limit": 2})
    assert r.status_code == 200
    page = r.json()["data"]
    assert page["totalDocs"] == 3
    assert page["totalPages"] == 2
    assert len(page["docs"]) == 2
    assert page["hasNextPage"] is True
    assert all("password_hash" not in u for u in page["docs"])


@pytest.mark.asyncio
async def test_list_users_as_user_forbidden(user_client):
    r = await user_client.get("/api/users")
    assert r.status_code == 403
    assert r.json() == {"status": "ERR", "data": "Unauthorized access"}


@pytest.mark.asyncio
async def test_list_users_anonymous(client):
    r = await client.get("/api/users")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_list_users_rejects_zero_limit(admin_client):
    r = await admin_client.get("/api/users", params={"limit": 0})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_promote(db_session):
    svc = UserService(db_session)
    await svc.register(UserCreate(
        first_name="Lin", email="lin@example.com", password="password-123",
    ))
    user = await svc.promote("lin@example.com")
    assert user.rol == "ADMIN"
    assert await svc.promote("nobody@example.com") is None
