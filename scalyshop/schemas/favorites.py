"""Pydantic schemas that power the favorites API surface."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FavoriteCreate(BaseModel):
    """Payload for ``POST /api/favorites``.

    ``productId`` is optional so that a missing value is reported by the
    service with its own message instead of a generic 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_id: str | None = Field(
        None,
        alias="productId",
        description="Identifier of the product to mark as favorite.",
    )

    @classmethod
    def from_body(cls, body: Any) -> FavoriteCreate:
        """Read a raw request body; anything but a string ``productId`` counts as absent.

        A missing body, a JSON value that is not an object and a non-string
        ``productId`` all yield ``product_id=None``.
        """

        if not isinstance(body, dict):
            return cls()
        product_id = body.get("productId")
        return cls(product_id=product_id if isinstance(product_id, str) else None)


class Favorite(BaseModel):
    """Read model exposed in API responses."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str = Field(..., description="Surrogate primary key for the favorite row")
    product_id: str = Field(..., description="Product referenced by the favorite")
    created_at: datetime = Field(..., description="When the product was first favorited")
    updated_at: datetime = Field(..., description="Last time the favorite was (re)added")


class FavoriteListResponse(BaseModel):
    """Container returned by the listing endpoint."""

    favorites: list[Favorite]
