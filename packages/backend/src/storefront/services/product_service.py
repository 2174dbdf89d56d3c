"""Product service — catalog reads and writes.

Routes validate identifiers and required fields before calling in here;
the service only talks to the database. Lookups of absent products
return None and leave the response shape to the caller.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import Product
from storefront.schemas.product import Page, ProductCreate, ProductRead, ProductUpdate
from storefront.services.pagination import paginate

logger = structlog.get_logger()


class ProductService:
    """Business logic for the product catalog."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_products(self) -> list[Product]:
        """Every product, unpaginated."""
        result = await self.db.execute(
            select(Product).order_by(Product.created_at, Product.id)
        )
        return list(result.scalars().all())

    async def get_product(self, product_id: str) -> Product | None:
        return await self.db.get(Product, product_id)

    async def get_products_paginated(self, page: int, limit: int) -> Page:
        return await paginate(
            self.db,
            Product,
            page,
            limit,
            ProductRead,
            order_by=(Product.created_at, Product.id),
        )

    async def add_product(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)
        logger.debug("storefront.product.created", product_id=product.id, title=product.title)
        return product

    async def update_product(
        self, product_id: str, data: ProductUpdate
    ) -> Product | None:
        """Apply only the fields present in `data`."""
        product = await self.db.get(Product, product_id)
        if product is None:
            return None
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(product, field, value)
        await self.db.commit()
        await self.db.refresh(product)
        logger.debug(
            "storefront.product.updated",
            product_id=product_id,
            fields=sorted(changes),
        )
        return product

    async def delete_product(self, product_id: str) -> bool:
        """Delete a product. Returns False when there was nothing to delete."""
        product = await self.db.get(Product, product_id)
        if product is None:
            return False
        await self.db.delete(product)
        await self.db.commit()
        logger.debug("storefront.product.deleted", product_id=product_id)
        return True
