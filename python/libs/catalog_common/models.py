"""Shared Pydantic models for the product catalog."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductBase(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(gt=0)
    stock: int = Field(ge=0)
    description: str = ""
    category: str = ""


class Product(ProductBase):
    """A stored product. Frozen so readers can never mutate store state."""

    model_config = ConfigDict(frozen=True)

    id: int
    created_at: datetime
    updated_at: datetime


class ProductUpdate(BaseModel):
    """Sparse patch: ``None`` means the field was not supplied.

    Values are not range-checked here; the store ignores empty text,
    non-positive prices and negative stock.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    category: Optional[str] = None


class ProductListResponse(BaseModel):
    total: int
    page: int = 1
    page_size: int
    products: list[Product]


class CategoryProductsResponse(BaseModel):
    category: str
    total: int
    products: list[Product]


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class MessageResponse(BaseModel):
    message: str
