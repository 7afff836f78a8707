"""Operational endpoints: health probe and Prometheus scrape target."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from scalyshop.observability import ObservabilityContext, get_observability
from scalyshop.observability.metrics import CONTENT_TYPE_LATEST

router = APIRouter()


@router.get("/health")
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


@router.get("/metrics", include_in_schema=False)
async def metrics(
    observability: ObservabilityContext = Depends(get_observability),
) -> Response:
    return Response(
        content=observability.metrics.render(),
        media_type=CONTENT_TYPE_LATEST,
    )
