"""Repository package for the database access layer."""

from scalyshop.db.repositories.base import BaseRepository
from scalyshop.db.repositories.favorite_repository import FavoriteRepository
from scalyshop.db.repositories.product_repository import ProductRepository

__all__ = [
    "BaseRepository",
    "FavoriteRepository",
    "ProductRepository",
]
