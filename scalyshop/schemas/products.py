"""Pydantic schemas for the product catalogue endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class ProductSort(str, Enum):
    """Orderings supported by ``GET /api/products``."""

    NAME = "name"
    PRICE = "price"
    NEWEST = "newest"


class ProductCreate(BaseModel):
    """Payload for registering a product in the catalogue.

    ``price`` accepts strings as well as JSON numbers; the service decides
    whether the value is an acceptable price.
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2048)
    price: Any = Field(
        None,
        description="Non-negative amount with at most two decimal places, e.g. '10.99'.",
    )

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name must not be blank once whitespace is removed")
        return cleaned


class Product(BaseModel):
    """Read model exposed in API responses."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str
    name: str
    description: str | None = None
    price: Decimal
    created_at: datetime

    @field_serializer("price")
    def _render_price(self, value: Decimal) -> str:
        return f"{value:.2f}"


class ProductListResponse(BaseModel):
    """Container returned by the listing endpoint."""

    products: list[Product]
