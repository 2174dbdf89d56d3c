"""Offset pagination producing page descriptors.

The descriptor mirrors the shape listing views already consume:
docs plus totalDocs/totalPages/page and adjacent-page flags. An empty
collection still reports one (empty) page.
"""

import math

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.schemas.product import Page


async def paginate(
    db: AsyncSession,
    model,
    page: int,
    limit: int,
    read_schema,
    order_by=(),
) -> Page:
    """Fetch one page of `model` rows and wrap them in a Page.

    No upper bound on limit: a large value reads the whole table.
    """
    total = await db.scalar(select(func.count()).select_from(model)) or 0
    total_pages = math.ceil(total / limit) or 1

    query = (
        select(model)
        .order_by(*order_by)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(query)
    rows = result.scalars().all()

    has_prev = page > 1
    has_next = page < total_pages
    return Page(
        docs=[read_schema.model_validate(row) for row in rows],
        totalDocs=total,
        limit=limit,
        totalPages=total_pages,
        page=page,
        pagingCounter=(page - 1) * limit + 1,
        hasPrevPage=has_prev,
        hasNextPage=has_next,
        prevPage=page - 1 if has_prev else None,
        nextPage=page + 1 if has_next else None,
    )
