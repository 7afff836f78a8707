"""Business logic powering the favorites API endpoints.

Favorites are keyed by product: there is at most one favorite per product and
the product identifier is also what callers use to remove it.  The service
validates input and the referenced product, then delegates each mutation to a
single atomic statement in :class:`FavoriteRepository`.
"""

from __future__ import annotations

import logging

from scalyshop.db.repositories import FavoriteRepository, ProductRepository
from scalyshop.exceptions import InvalidInputError, NotFoundError
from scalyshop.schemas.favorites import Favorite as FavoriteSchema

logger = logging.getLogger(__name__)

PRODUCT_ID_REQUIRED = "Product ID is required."
PRODUCT_NOT_FOUND = "Product not found."
FAVORITE_NOT_FOUND = "Favorite item not found"


class FavoritesService:
    """Coordinates product lookups and favorite persistence."""

    def __init__(
        self,
        *,
        favorites: FavoriteRepository,
        products: ProductRepository,
    ) -> None:
        self._favorites = favorites
        self._products = products

    async def list_favorites(self) -> list[FavoriteSchema]:
        rows = await self._favorites.list_favorites()
        return [FavoriteSchema.model_validate(row) for row in rows]

    async def add_favorite(self, product_id: str | None) -> FavoriteSchema:
        """Mark ``product_id`` as favorite; repeating the call is harmless."""

        if not product_id:
            raise InvalidInputError(PRODUCT_ID_REQUIRED)

        product = await self._products.get_by_id(product_id)
        if product is None:
            logger.info("Refusing to favorite unknown product %s", product_id)
            raise NotFoundError(PRODUCT_NOT_FOUND)

        favorite = await self._favorites.upsert(product_id)
        logger.debug("Favorite stored for product %s", product_id)
        return FavoriteSchema.model_validate(favorite)

    async def remove_favorite(self, product_id: str) -> None:
        deleted = await self._favorites.delete_by_product_id(product_id)
        if deleted is None:
            raise NotFoundError(FAVORITE_NOT_FOUND)
        logger.debug("Favorite removed for product %s", product_id)


__all__ = [
    "FAVORITE_NOT_FOUND",
    "PRODUCT_ID_REQUIRED",
    "PRODUCT_NOT_FOUND",
    "FavoritesService",
]
