"""API route aggregation.

Everything under /api is mounted here; main.py adds the view routes and
the WebSocket route at the root. Role checks live on the individual
routers (users is admin-only), the catalog REST routes are open.
"""

from fastapi import APIRouter

from storefront.api.health import router as health_router
from storefront.api.products import router as products_router
from storefront.api.sessions import router as sessions_router
from storefront.api.users import router as users_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(sessions_router, tags=["sessions"])
api_router.include_router(products_router, tags=["products"])
api_router.include_router(users_router, tags=["users"])
