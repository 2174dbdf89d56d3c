"""Session API — registration, login, logout, current user.

- POST /sessions/register → create an account (USER, or ADMIN for the
  configured admin email)
- POST /sessions/login → email/password → session cookie
- POST /sessions/logout → clear the session cookie
- GET /sessions/current → the logged-in user
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.responses import ok
from storefront.auth.dependencies import CurrentUser, get_current_user
from storefront.auth.jwt import create_session_token
from storefront.config import settings
from storefront.db.engine import get_db
from storefront.errors import StorefrontError
from storefront.schemas.user import LoginRequest, UserCreate, UserRead
from storefront.services.user_service import UserService

router = APIRouter(prefix="/sessions")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("/register")
async def register(body: UserCreate, svc: UserService = Depends(_svc)):
    user = await svc.register(body)
    return ok(UserRead.model_validate(user).model_dump(), status_code=201)


@router.post("/login")
async def login(body: LoginRequest, svc: UserService = Depends(_svc)):
    user = await svc.authenticate(body.email, body.password)
    if user is None:
        raise StorefrontError("INVALID_CREDENTIALS", envelope="ERR")

    response = ok(UserRead.model_validate(user).model_dump())
    response.set_cookie(
        settings.session_cookie_name,
        create_session_token(user.id, user.rol),
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.environment != "development",
    )
    return response


@router.post("/logout")
async def logout():
    response = ok("Logged out")
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/current")
async def current(user: CurrentUser = Depends(get_current_user)):
    return ok({
        "id": user.id,
        "first_name": user.first_name,
        "email": user.email,
        "rol": user.rol,
    })
