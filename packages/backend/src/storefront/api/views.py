"""View routes — the pages of the shop.

Each route answers the view model a page template renders, as JSON:
{"view": <page name>, ...context}. Session checks happen here:
anonymous visitors are redirected to /login, non-admins are sent to
/profile (users) or refused (realtime products).
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.responses import view_error, view_errors
from storefront.auth.dependencies import CurrentUser, get_current_user_optional
from storefront.config import settings
from storefront.db.engine import get_db
from storefront.errors import ERRORS
from storefront.schemas.chat import MessageRead
from storefront.schemas.product import ProductRead
from storefront.services.chat_service import MessageService
from storefront.services.mock_products import DEFAULT_COUNT, mock_products
from storefront.services.product_service import ProductService
from storefront.services.user_service import UserService

logger = structlog.get_logger()
router = APIRouter(tags=["views"])


def _render(view: str, **context) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder({"view": view, **context}))


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(path, status_code=302)


def _products(rows) -> list[dict]:
    return [ProductRead.model_validate(p).model_dump() for p in rows]


@router.get("/")
async def index(db: AsyncSession = Depends(get_db)):
    logger.warning("storefront.views.index_lookup")
    try:
        products = await ProductService(db).get_products()
    except SQLAlchemyError as e:
        logger.error("storefront.views.index_failed", error=str(e))
        info = ERRORS["PRODUCT_MODEL_FIND_ERROR"]
        return view_error(info.message, status_code=info.code)
    return _render("index", allProducts=_products(products))


@router.get("/products")
@view_errors
async def products_page(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.products_page_limit, ge=1),
    user: Optional[CurrentUser] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    if user is None:
        return _redirect("/login")

    data = await ProductService(db).get_products_paginated(page, limit)
    return _render(
        "products",
        title="Product list",
        products=data.docs,
        userName=f"Welcome: {user.first_name}",
        userRol=f"Role: {user.rol}",
        pagination={
            "totalPages": data.totalPages,
            "currentPage": data.page,
            "hasNextPage": data.hasNextPage,
            "hasPrevPage": data.hasPrevPage,
            "nextPage": data.nextPage,
            "prevPage": data.prevPage,
            "limit": limit,
        },
    )


@router.get("/users")
@view_errors
async def users_page(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.users_page_limit, ge=1),
    user: Optional[CurrentUser] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    if user is None:
        return _redirect("/login")
    if not user.is_admin:
        return _redirect("/profile")

    data = (await UserService(db).get_users_paginated(page, limit)).model_dump()
    # Page links are expanded here so templates need no arithmetic.
    data["pages"] = list(range(1, data["totalPages"] + 1))
    return _render("users", title="User list", data=data)


@router.get("/cookies")
async def cookies_page():
    return _render("cookies")


@router.get("/login")
async def login_page(user: Optional[CurrentUser] = Depends(get_current_user_optional)):
    if user is not None:
        return _redirect("/profile")
    return _render("login")


@router.get("/profile")
async def profile_page(user: Optional[CurrentUser] = Depends(get_current_user_optional)):
    if user is None:
        return _redirect("/login")
    return _render(
        "profile",
        userName=f"User: {user.first_name}",
        userRol=f"Role: {user.rol}",
    )


@router.get("/register")
async def register_page():
    return _render("register")


@router.get("/chat")
@view_errors
async def chat_page(
    user: Optional[CurrentUser] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    logger.info("storefront.views.chat_opened")
    if user is None:
        return _redirect("/login")

    messages = await MessageService(db).list_messages()
    return _render(
        "chat",
        messages=[MessageRead.model_validate(m).model_dump() for m in messages],
    )


@router.get("/realTimeProducts")
@view_errors
async def realtime_products_page(
    user: Optional[CurrentUser] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    logger.info("storefront.views.realtime_products_opened")
    if user is None or not user.is_admin:
        return PlainTextResponse(ERRORS["FORBIDDEN"].message, status_code=403)

    products = await ProductService(db).get_products()
    return _render("realTimeProducts", allProducts=_products(products))


@router.get("/mockingproducts")
async def mocking_products(count: int = Query(DEFAULT_COUNT, ge=1, le=1000)):
    """A generated catalog, never persisted."""
    return _render("mockingproducts", products=[p.model_dump() for p in mock_products(count)])


@router.get("/loggerTest")
async def logger_test():
    """Emit one log entry per level."""
    logger.debug("storefront.logger_test")
    logger.info("storefront.logger_test")
    logger.warning("storefront.logger_test")
    logger.error("storefront.logger_test")
    logger.critical("storefront.logger_test")
    return PlainTextResponse("Logged all levels")
