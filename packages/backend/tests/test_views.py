"""View routes — session gating, redirects, and the view models.

Redirects are checked without following them (httpx default).
"""

from datetime import datetime, timezone

import pytest

from storefront.schemas.product import ProductCreate, ProductRead
from storefront.services.chat_service import MessageService
from storefront.services.product_service import ProductService


async def _seed_products(db_session, count):
    svc = ProductService(db_session)
    for i in range(count):
        await svc.add_product(ProductCreate(
            title=f"Item {i}", price=1.5, code=f"I-{i}", category="misc", stock=3,
        ))


# ═══════════════════════════════════════════════════════════
# Public views
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_index_lists_products(client, db_session):
    await _seed_products(db_session, 2)
    r = await client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["view"] == "index"
    assert len(body["allProducts"]) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("path,view", [
    ("/cookies", "cookies"),
    ("/register", "register"),
    ("/login", "login"),
])
async def test_static_views(client, path, view):
    r = await client.get(path)
    assert r.status_code == 200
    assert r.json() == {"view": view}


@pytest.mark.asyncio
async def test_logger_test(client):
    r = await client.get("/loggerTest")
    assert r.status_code == 200
    assert r.text == "Logged all levels"


@pytest.mark.asyncio
async def test_mocking_products(client):
    r = await client.get("/mockingproducts")
    assert r.status_code == 200
    body = r.json()
    assert body["view"] == "mockingproducts"
    products = body["products"]
    assert len(products) == 100
    assert len({p["id"] for p in products}) == 100
    assert all(len(p["id"]) == 24 for p in products)
    assert set(products[0]) == set(ProductRead.model_fields)

    # Nothing is written to the catalog
    r = await client.get("/api/products")
    assert r.json()["data"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize("count,status", [(3, 200), (0, 422), (1001, 422)])
async def test_mocking_products_count(client, count, status):
    r = await client.get("/mockingproducts", params={"count": count})
    assert r.status_code == status
    if status == 200:
        assert len(r.json()["products"]) == count


# ═══════════════════════════════════════════════════════════
# Login required
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/products", "/profile", "/chat", "/users"])
async def test_anonymous_redirected_to_login(client, path):
    r = await client.get(path)
    assert r.status_code == 302
    assert r.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_login_page_redirects_when_logged_in(user_client):
    r = await user_client.get("/login")
    assert r.status_code == 302
    assert r.headers["location"] == "/profile"


@pytest.mark.asyncio
async def test_profile(user_client):
    r = await user_client.get("/profile")
    assert r.json() == {
        "view": "profile",
        "userName": "User: Ada",
        "userRol": "Role: USER",
    }


@pytest.mark.asyncio
async def test_products_page_paginates(user_client, db_session):
    await _seed_products(db_session, 30)
    r = await user_client.get("/products", params={"page": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["view"] == "products"
    assert body["userName"] == "Welcome: Ada"
    assert len(body["products"]) == 5
    assert body["pagination"] == {
        "totalPages": 2,
        "currentPage": 2,
        "hasNextPage": False,
        "hasPrevPage": True,
        "nextPage": None,
        "prevPage": 1,
        "limit": 25,
    }


@pytest.mark.asyncio
async def test_products_page_empty_catalog(user_client):
    r = await user_client.get("/products")
    pagination = r.json()["pagination"]
    assert pagination["totalPages"] == 1
    assert pagination["hasNextPage"] is False


@pytest.mark.asyncio
async def test_chat_page_lists_messages(user_client, db_session):
    await MessageService(db_session).save_message(
        "Alice", "hola", datetime.now(timezone.utc)
    )
    r = await user_client.get("/chat")
    assert r.status_code == 200
    messages = r.json()["messages"]
    assert [(m["user"], m["message"]) for m in messages] == [("Alice", "hola")]


# ═══════════════════════════════════════════════════════════
# Admin only
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_users_page_sends_plain_users_to_profile(user_client):
    r = await user_client.get("/users")
    assert r.status_code == 302
    assert r.headers["location"] == "/profile"


@pytest.mark.asyncio
async def test_users_page_for_admin(admin_client):
    r = await admin_client.get("/users")
    assert r.status_code == 200
    body = r.json()
    assert body["view"] == "users"
    assert body["data"]["pages"] == [1]
    assert body["data"]["limit"] == 50


@pytest.mark.asyncio
async def test_realtime_products_forbidden_for_users(user_client):
    r = await user_client.get("/realTimeProducts")
    assert r.status_code == 403
    assert r.text == "Unauthorized access"


@pytest.mark.asyncio
async def test_realtime_products_forbidden_for_anonymous(client):
    r = await client.get("/realTimeProducts")
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_realtime_products_for_admin(admin_client, db_session):
    await _seed_products(db_session, 1)
    r = await admin_client.get("/realTimeProducts")
    assert r.status_code == 200
    assert r.json()["view"] == "realTimeProducts"
    assert len(r.json()["allProducts"]) == 1
