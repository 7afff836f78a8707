"""Catalogue operations: price-validated creation and A/B sorted listings."""

from __future__ import annotations

import logging

from scalyshop.db.repositories import ProductRepository
from scalyshop.exceptions import InvalidInputError
from scalyshop.observability import PRODUCT_SORT_BY_PRICE_FLAG, ObservabilityContext
from scalyshop.schemas.products import Product as ProductSchema
from scalyshop.schemas.products import ProductCreate, ProductSort
from scalyshop.utils.validators import parse_price

logger = logging.getLogger(__name__)

INVALID_PRICE = (
    "Invalid price. Use a non-negative amount with at most two decimal places."
)

# Default orderings compared by the product sort experiment.
SORT_VERSIONS: dict[str, ProductSort] = {
    "v1": ProductSort.NEWEST,
    "v2": ProductSort.PRICE,
}


class ProductService:
    def __init__(
        self,
        *,
        products: ProductRepository,
        observability: ObservabilityContext,
    ) -> None:
        self._products = products
        self._observability = observability

    async def create_product(self, payload: ProductCreate) -> ProductSchema:
        price = parse_price(payload.price)
        if price is None:
            logger.info("Rejected product %r with invalid price %r", payload.name, payload.price)
            raise InvalidInputError(INVALID_PRICE)

        product = await self._products.create_product(
            name=payload.name,
            description=payload.description,
            price=price,
        )
        return ProductSchema.model_validate(product)

    async def list_products(self, sort_by: ProductSort | None = None) -> list[ProductSchema]:
        """Return the catalogue in the requested or experiment-selected order.

        An explicit ``sort_by`` always wins.  Otherwise the
        ``product-sort-by-price`` flag decides between the ``v1`` (newest
        first) and ``v2`` (cheapest first) orderings and the chosen version is
        counted for the experiment.
        """

        metrics = self._observability.metrics
        if sort_by is None:
            version = self.resolve_sort_version()
            sort_by = SORT_VERSIONS[version]
            metrics.record_sort_version(version)
        metrics.record_sort_by(sort_by.value)

        rows = await self._products.list_products(sort_by)
        return [ProductSchema.model_validate(row) for row in rows]

    def resolve_sort_version(self) -> str:
        if self._observability.flags.is_enabled(PRODUCT_SORT_BY_PRICE_FLAG):
            return "v2"
        return "v1"


__all__ = ["INVALID_PRICE", "SORT_VERSIONS", "ProductService"]
