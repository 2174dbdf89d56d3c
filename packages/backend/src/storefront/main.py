"""FastAPI application factory.

create_app() returns a configured FastAPI instance: middleware, error
handlers, the /api routers, the view routes, the /ws channel, and one
ChatChannel (connection registry + history) for this server instance.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__
from storefront.config import settings

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "storefront.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from storefront.redis_pool import close_redis, init_redis
    try:
        await init_redis()
        logger.info("storefront.redis_connected", url=settings.redis_url)
    except Exception as e:
        # Redis is optional: only rate limiting depends on it
        logger.warning("storefront.redis_unavailable", error=str(e))

    yield

    logger.info("storefront.shutdown")
    await close_redis()

    from storefront.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Storefront",
        description="Product catalog, sessions and live chat",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → RateLimit → CORS → handler

    from storefront.middleware.rate_limit import RateLimitMiddleware
    from storefront.middleware.request_id import RequestIdMiddleware
    from storefront.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    from storefront.errors import register_exception_handlers
    register_exception_handlers(app)

    # ── Realtime channel (one registry per instance) ─────────
    from storefront.db.engine import async_session_factory
    from storefront.realtime.channel import ChatChannel
    from storefront.realtime.connections import ConnectionManager
    from storefront.services.chat_service import ChatHistory

    app.state.chat_channel = ChatChannel(
        ConnectionManager(), ChatHistory(async_session_factory)
    )

    # ── Routes ────────────────────────────────────────────────
    from storefront.api import api_router
    from storefront.api.views import router as views_router
    from storefront.realtime.websocket import router as ws_router

    app.include_router(api_router)
    app.include_router(views_router)
    app.include_router(ws_router)

    return app


# Default app instance (used by uvicorn: storefront.main:app)
app = create_app()
