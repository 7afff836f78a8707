"""HTTP-level tests for ``/api/favorites``."""

from __future__ import annotations

import httpx
import pytest

from scalyshop.main import app
from scalyshop.observability import ObservabilityContext
from scalyshop.services.dependencies import get_favorites_service


@pytest.mark.asyncio
async def test_list_is_empty_initially(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/favorites")

    assert response.status_code == 200
    assert response.json() == {"favorites": []}


@pytest.mark.asyncio
async def test_add_favorite_returns_camel_case_record(
    client: httpx.AsyncClient, product_factory
) -> None:
    product = await product_factory()

    response = await client.post("/api/favorites", json={"productId": product.id})

    assert response.status_code == 200
    body = response.json()
    assert body["productId"] == product.id
    assert set(body) == {"id", "productId", "createdAt", "updatedAt"}
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_adding_twice_keeps_one_entry(
    client: httpx.AsyncClient, product_factory
) -> None:
    product = await product_factory()

    first = await client.post("/api/favorites", json={"productId": product.id})
    second = await client.post("/api/favorites", json={"productId": product.id})

    assert first.status_code == second.status_code == 200
    assert second.json()["id"] == first.json()["id"]

    listing = (await client.get("/api/favorites")).json()["favorites"]
    assert [item["productId"] for item in listing] == [product.id]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "request_kwargs",
    [
        {},
        {"json": {}},
        {"json": {"productId": None}},
        {"json": {"productId": ""}},
        {"json": {"productId": 42}},
        {"json": []},
        {"json": "productId"},
        {"content": b"productId=abc", "headers": {"content-type": "text/plain"}},
    ],
    ids=[
        "no-body",
        "empty-object",
        "null-id",
        "empty-id",
        "numeric-id",
        "array-body",
        "string-body",
        "text-body",
    ],
)
async def test_add_without_product_id_is_rejected(
    client: httpx.AsyncClient, request_kwargs: dict
) -> None:
    response = await client.post("/api/favorites", **request_kwargs)

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Product ID is required."
    assert body["error_type"] == "validation_error"
    assert body["path"] == "/api/favorites"


@pytest.mark.asyncio
async def test_add_unknown_product_returns_404(client: httpx.AsyncClient) -> None:
    response = await client.post("/api/favorites", json={"productId": "nope"})

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found."
    assert (await client.get("/api/favorites")).json() == {"favorites": []}


@pytest.mark.asyncio
async def test_remove_favorite(client: httpx.AsyncClient, product_factory) -> None:
    product = await product_factory()
    await client.post("/api/favorites", json={"productId": product.id})

    response = await client.delete(f"/api/favorites/{product.id}")

    assert response.status_code == 204
    assert response.content == b""
    assert (await client.get("/api/favorites")).json() == {"favorites": []}


@pytest.mark.asyncio
async def test_remove_unknown_favorite_returns_404(
    client: httpx.AsyncClient, product_factory
) -> None:
    product = await product_factory()
    await client.post("/api/favorites", json={"productId": product.id})

    response = await client.delete("/api/favorites/not-a-favorite")

    assert response.status_code == 404
    assert response.json()["message"] == "Favorite item not found"
    listing = (await client.get("/api/favorites")).json()["favorites"]
    assert len(listing) == 1


@pytest.mark.asyncio
async def test_requests_are_counted_by_route_template(
    client: httpx.AsyncClient, observability: ObservabilityContext
) -> None:
    await client.get("/api/favorites")
    await client.get("/api/favorites")
    await client.delete("/api/favorites/abc")

    registry = observability.metrics.registry
    assert (
        registry.get_sample_value(
            "http_requests_total",
            {"method": "GET", "path": "/api/favorites", "status_code": "200"},
        )
        == 2.0
    )
    assert (
        registry.get_sample_value(
            "http_requests_total",
            {
                "method": "DELETE",
                "path": "/api/favorites/{product_id}",
                "status_code": "404",
            },
        )
        == 1.0
    )
    assert (
        registry.get_sample_value(
            "http_request_duration_seconds_count",
            {"method": "GET", "path": "/api/favorites", "status_code": "200"},
        )
        == 2.0
    )


@pytest.mark.asyncio
async def test_unhandled_errors_keep_request_id(
    client: httpx.AsyncClient, observability: ObservabilityContext
) -> None:
    def _broken_service() -> None:
        raise RuntimeError("boom")

    app.dependency_overrides[get_favorites_service] = _broken_service

    response = await client.get("/api/favorites")

    assert response.status_code == 500
    assert response.headers["X-Request-ID"]
    body = response.json()
    assert body["message"] == "Internal server error"
    assert body["request_id"] == response.headers["X-Request-ID"]
    assert "boom" not in response.text
    assert (
        observability.metrics.registry.get_sample_value(
            "http_requests_total",
            {"method": "GET", "path": "/api/favorites", "status_code": "500"},
        )
        == 1.0
    )
