"""Pydantic schemas for API requests and responses."""

from scalyshop.schemas.error import (  # noqa: F401
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from scalyshop.schemas.favorites import (  # noqa: F401
    Favorite,
    FavoriteCreate,
    FavoriteListResponse,
)
from scalyshop.schemas.products import (  # noqa: F401
    Product,
    ProductCreate,
    ProductListResponse,
    ProductSort,
)
