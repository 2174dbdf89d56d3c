"""FastAPI auth dependencies.

get_current_user_optional is the soft variant used by view routes,
which redirect anonymous visitors instead of failing. get_current_user
and require_admin are the hard variants for API routes.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.auth.jwt import TokenError, verify_token
from storefront.config import settings
from storefront.db.engine import get_db
from storefront.db.models import ROLE_ADMIN, User
from storefront.errors import StorefrontError

logger = structlog.get_logger()


class CurrentUser:
    """The authenticated principal attached to a request."""

    def __init__(
        self,
        id: str,
        first_name: str,
        email: str,
        rol: str,
    ):
        self.id = id
        self.first_name = first_name
        self.email = email
        self.rol = rol

    @property
    def is_admin(self) -> bool:
        return self.rol == ROLE_ADMIN

    @classmethod
    def from_user(cls, user: User) -> "CurrentUser":
        return cls(
            id=user.id,
            first_name=user.first_name,
            email=user.email,
            rol=user.rol,
        )


def _extract_token(request: Request, authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:]
    return request.cookies.get(settings.session_cookie_name)


async def get_current_user_optional(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Optional[CurrentUser]:
    """Resolve the session principal, or None for anonymous requests.

    Invalid or expired tokens count as anonymous.
    """
    token = _extract_token(request, authorization)
    if not token:
        return None

    try:
        payload = verify_token(token)
    except TokenError as e:
        logger.info("storefront.auth.rejected_token", reason=str(e))
        return None

    user = await db.get(User, payload["sub"])
    if user is None:
        return None
    return CurrentUser.from_user(user)


async def get_current_user(
    user: Optional[CurrentUser] = Depends(get_current_user_optional),
) -> CurrentUser:
    if user is None:
        raise StorefrontError("UNAUTHORIZED", envelope="ERR")
    return user


async def require_admin(
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    if not user.is_admin:
        raise StorefrontError("FORBIDDEN", envelope="ERR")
    return user
