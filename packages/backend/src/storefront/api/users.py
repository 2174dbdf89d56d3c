"""User API routes — admin-only paginated listing."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.responses import ok, rest_errors
from storefront.auth.dependencies import require_admin
from storefront.config import settings
from storefront.db.engine import get_db
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", dependencies=[Depends(require_admin)])


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("")
@rest_errors
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.users_page_limit, ge=1),
    svc: UserService = Depends(_svc),
):
    result = await svc.get_users_paginated(page, limit)
    return ok(result.model_dump())
