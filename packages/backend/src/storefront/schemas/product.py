"""Pydantic schemas for products and page descriptors.

Separate schemas for create/update/read keep the API clean:
- ProductCreate: a complete new product (form or JSON body)
- ProductUpdate: every field optional, only supplied ones are applied
- ProductRead: what the API returns
- Page: a result page plus pagination metadata
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ─── Products ───────────────────────────────────────────

class ProductCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: float
    thumbnail: Optional[str] = None
    code: str = Field(..., min_length=1, max_length=100)
    category: str = Field(default="general", min_length=1, max_length=100)
    stock: int


class ProductUpdate(BaseModel):
    """Partial update — only fields that were supplied are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = None
    thumbnail: Optional[str] = None
    code: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    stock: Optional[int] = None


class ProductRead(BaseModel):
    id: str
    title: str
    description: Optional[str]
    price: float
    thumbnail: Optional[str]
    code: str
    category: str
    stock: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ─── Pagination ─────────────────────────────────────────

class Page(BaseModel, Generic[T]):
    """Page descriptor. Field names follow the camelCase the views expect."""
    docs: list[T]
    totalDocs: int
    limit: int
    totalPages: int
    page: int
    pagingCounter: int
    hasPrevPage: bool
    hasNextPage: bool
    prevPage: Optional[int]
    nextPage: Optional[int]
