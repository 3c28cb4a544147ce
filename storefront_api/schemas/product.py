# ==============================================================================
# PRODUCT SCHEMAS - Catalog
# ==============================================================================
# Request/Response schemas for product management
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from storefront_api.schemas.base import BaseSchema, TimestampSchema


class ProductCreate(BaseSchema):
    """Schema for creating a product."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Product name",
    )
    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Product description",
    )
    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=18,
        decimal_places=2,
        description="Product price",
    )
    quantity: int = Field(
        0,
        ge=0,
        description="Units in stock",
    )


class ProductUpdate(BaseSchema):
    """Schema for updating a product. Only fields that are set are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=18, decimal_places=2)
    quantity: Optional[int] = Field(None, ge=0)


class ProductResponse(TimestampSchema):
    """Schema for product response."""

    id: int = Field(..., description="Product identifier")
    name: str
    description: Optional[str] = None
    price: Decimal
    quantity: int
