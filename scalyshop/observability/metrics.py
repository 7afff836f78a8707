"""Prometheus metrics for the shop.

All metrics live on a private :class:`~prometheus_client.CollectorRegistry`
owned by :class:`ShopMetrics`.  Nothing is registered on the global default
registry, so any number of instances (one per application, one per test) can
coexist in a process.
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

__all__ = [
    "CONTENT_TYPE_LATEST",
    "ORDER_VALUE_BUCKETS",
    "REQUEST_LATENCY_BUCKETS",
    "UNMATCHED_PATH",
    "ShopMetrics",
]

REQUEST_LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10)
ORDER_VALUE_BUCKETS = (10, 50, 100, 200, 500, 1000)

# Label used for requests that did not match any route, keeps cardinality bounded.
UNMATCHED_PATH = "unmatched"


class ShopMetrics:
    """Owns the registry and every metric exported by the backend."""

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        *,
        default_collectors: bool = True,
    ) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        if default_collectors:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

        self.http_requests = Counter(
            "http_requests_total",
            "HTTP requests handled, by normalized route",
            ["method", "path", "status_code"],
            registry=self.registry,
        )
        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP latency seconds",
            ["method", "path", "status_code"],
            buckets=REQUEST_LATENCY_BUCKETS,
            registry=self.registry,
        )
        self.order_total_value = Histogram(
            "order_total_value",
            "Total value of an order at checkout",
            buckets=ORDER_VALUE_BUCKETS,
            registry=self.registry,
        )
        self.order_price = Counter(
            "per_order_price_count",
            "Record the price of each order",
            ["orderRef"],
            registry=self.registry,
        )
        self.product_sort_ab_test = Counter(
            "product_sort_ab_test",
            "Counts the number of times each version of the product sort is used",
            ["version"],
            registry=self.registry,
        )
        self.product_sort_requests = Counter(
            "per_request_product_sort_count",
            "Record the sorting method of products for each request.",
            ["sort_by"],
            registry=self.registry,
        )

    def observe_request(
        self, method: str, path: str, status_code: int, duration_seconds: float
    ) -> None:
        labels = (method.upper(), path or UNMATCHED_PATH, str(status_code))
        self.http_requests.labels(*labels).inc()
        self.http_request_duration.labels(*labels).observe(duration_seconds)

    def record_order(self, order_ref: str, total: float) -> None:
        """Record a checked-out order.

        Checkout lives outside this backend; this is the hook an order flow
        sharing the context calls. Until one does, the
        ``order_total_value`` and ``per_order_price_count`` series stay empty.

        ``total`` is added to the per-order price counter and feeds the value
        histogram. The counter rejects negative totals with ``ValueError``
        before the histogram is touched.
        """

        self.order_price.labels(orderRef=order_ref).inc(total)
        self.order_total_value.observe(total)

    def record_sort_version(self, version: str) -> None:
        self.product_sort_ab_test.labels(version=version).inc()

    def record_sort_by(self, sort_by: str) -> None:
        self.product_sort_requests.labels(sort_by=sort_by).inc()

    def render(self) -> bytes:
        """Return the registry in the Prometheus text exposition format."""

        return generate_latest(self.registry)
