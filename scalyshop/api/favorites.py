"""FastAPI router exposing the favorites list."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from scalyshop.schemas.favorites import Favorite, FavoriteCreate, FavoriteListResponse
from scalyshop.services.dependencies import get_favorites_service
from scalyshop.services.favorites_service import FavoritesService

router = APIRouter()


@router.get("", response_model=FavoriteListResponse)
async def list_favorites(
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteListResponse:
    """Return all favorites in storage order."""

    return FavoriteListResponse(favorites=await service.list_favorites())


@router.post("", response_model=Favorite, status_code=status.HTTP_200_OK)
async def add_favorite(
    payload: Any = Body(
        None,
        description="JSON object with the `productId` to mark as favorite.",
        examples=[{"productId": "64f1c2a9e4b0a1b2c3d4e5f6"}],
    ),
    service: FavoritesService = Depends(get_favorites_service),
) -> Favorite:
    """Add a product to favorites, or refresh it when it is already there."""

    return await service.add_favorite(FavoriteCreate.from_body(payload).product_id)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_favorite(
    product_id: str,
    service: FavoritesService = Depends(get_favorites_service),
) -> Response:
    """Remove the favorite referencing ``product_id``."""

    await service.remove_favorite(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
