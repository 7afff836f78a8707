"""FastAPI router for the product catalogue."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from scalyshop.schemas.products import (
    Product,
    ProductCreate,
    ProductListResponse,
    ProductSort,
)
from scalyshop.services.dependencies import get_product_service
from scalyshop.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=ProductListResponse)
async def list_products(
    sort_by: ProductSort | None = Query(
        None,
        description=(
            "Explicit ordering. When omitted the default ordering is chosen by"
            " the product sort experiment."
        ),
    ),
    service: ProductService = Depends(get_product_service),
) -> ProductListResponse:
    return ProductListResponse(products=await service.list_products(sort_by))


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Register a product after validating its price."""

    return await service.create_product(payload)
