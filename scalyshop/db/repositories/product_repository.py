"""Read and write access to the product catalogue."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select

from scalyshop.db.models import Product
from scalyshop.db.repositories.base import BaseRepository
from scalyshop.schemas.products import ProductSort

_ORDERINGS = {
    ProductSort.NAME: (Product.name.asc(), Product.id.asc()),
    ProductSort.PRICE: (Product.price.asc(), Product.name.asc()),
    ProductSort.NEWEST: (Product.created_at.desc(), Product.id.asc()),
}


class ProductRepository(BaseRepository):
    async def get_by_id(self, product_id: str) -> Product | None:
        return await self._session.get(Product, product_id)

    async def list_products(self, sort_by: ProductSort) -> Sequence[Product]:
        query = select(Product).order_by(*_ORDERINGS[sort_by])
        result = await self._session.scalars(query)
        return result.all()

    async def create_product(
        self,
        *,
        name: str,
        price: Decimal,
        description: str | None = None,
    ) -> Product:
        """Persist a new product and flush so generated defaults are populated."""

        product = Product(name=name, price=price, description=description)
        self._session.add(product)
        await self._session.flush()
        return product
