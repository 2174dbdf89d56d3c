"""User service — registration, credential checks, paginated listing."""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.auth.password import hash_password, verify_password
from storefront.config import settings
from storefront.db.models import ROLE_ADMIN, ROLE_USER, User
from storefront.errors import StorefrontError
from storefront.schemas.product import Page
from storefront.schemas.user import UserCreate, UserRead
from storefront.services.pagination import paginate

logger = structlog.get_logger()


class UserService:
    """Business logic for shop accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_users_paginated(self, page: int, limit: int) -> Page:
        return await paginate(
            self.db, User, page, limit, UserRead,
            order_by=(User.created_at, User.id),
        )

    async def get_user(self, user_id: str) -> User | None:
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def register(self, data: UserCreate) -> User:
        """Create an account. The configured admin email registers as ADMIN."""
        if await self.get_user_by_email(data.email):
            raise StorefrontError("EMAIL_TAKEN", envelope="ERR")

        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            age=data.age,
            password_hash=hash_password(data.password),
            rol=ROLE_ADMIN if data.email == settings.admin_email else ROLE_USER,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("storefront.user.registered", user_id=user.id, rol=user.rol)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    async def promote(self, email: str) -> User | None:
        """Grant the ADMIN role. Returns None for unknown emails."""
        user = await self.get_user_by_email(email)
        if user is None:
            return None
        user.rol = ROLE_ADMIN
        await self.db.commit()
        logger.info("storefront.user.promoted", user_id=user.id)
        return user
