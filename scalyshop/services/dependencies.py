"""FastAPI dependency wiring for backend services.

Separating dependency factories from service implementation modules keeps the
latter free of web-layer concerns, enabling easier reuse in tests and other
consumers (e.g. CLI utilities).
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scalyshop.db.connection import get_db
from scalyshop.db.repositories import FavoriteRepository, ProductRepository
from scalyshop.observability import ObservabilityContext, get_observability
from scalyshop.services.favorites_service import FavoritesService
from scalyshop.services.product_service import ProductService


def get_favorites_service(
    session: AsyncSession = Depends(get_db),
) -> FavoritesService:
    """Provide a :class:`FavoritesService` bound to the request session."""

    return FavoritesService(
        favorites=FavoriteRepository(session),
        products=ProductRepository(session),
    )


def get_product_service(
    session: AsyncSession = Depends(get_db),
    observability: ObservabilityContext = Depends(get_observability),
) -> ProductService:
    """Wire repository + observability dependencies for the catalogue service."""

    return ProductService(
        products=ProductRepository(session),
        observability=observability,
    )


__all__ = ["get_favorites_service", "get_product_service"]
