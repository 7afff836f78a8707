"""Domain exceptions raised by the ScalyShop services.

Store failures are deliberately absent from this module: SQLAlchemy errors
propagate unmodified and are rendered by the exception handlers registered in
:mod:`scalyshop.main`.
"""

from __future__ import annotations

from fastapi import status

from scalyshop.schemas.error import ErrorType


class ScalyShopError(Exception):
    """Base class for errors that map onto a client-facing response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_type: ErrorType = ErrorType.VALIDATION_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(ScalyShopError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = ErrorType.VALIDATION_ERROR


class NotFoundError(ScalyShopError):
    """The referenced product or favorite does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = ErrorType.NOT_FOUND


__all__ = ["InvalidInputError", "NotFoundError", "ScalyShopError"]
