"""Explicitly constructed observability context.

The application builds one :class:`ObservabilityContext` at startup, stores
it on ``app.state`` and hands it to request handlers through
:func:`get_observability`.  Tests build their own contexts, so no metric or
flag state leaks between them.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from scalyshop.observability.feature_flags import (
    PRODUCT_SORT_BY_PRICE_FLAG,
    FeatureFlagClient,
    StaticFeatureFlags,
    UnleashFeatureFlags,
    create_feature_flags,
)
from scalyshop.observability.metrics import ShopMetrics
from scalyshop.settings import AppSettings


@dataclass
class ObservabilityContext:
    metrics: ShopMetrics
    flags: FeatureFlagClient


def create_observability(settings: AppSettings) -> ObservabilityContext:
    """Build metrics and feature flags from the supplied settings."""

    return ObservabilityContext(
        metrics=ShopMetrics(default_collectors=settings.metrics_default_collectors),
        flags=create_feature_flags(settings),
    )


def get_observability(request: Request) -> ObservabilityContext:
    """FastAPI dependency returning the context attached to the application."""

    return request.app.state.observability


__all__ = [
    "PRODUCT_SORT_BY_PRICE_FLAG",
    "FeatureFlagClient",
    "ObservabilityContext",
    "ShopMetrics",
    "StaticFeatureFlags",
    "UnleashFeatureFlags",
    "create_feature_flags",
    "create_observability",
    "get_observability",
]
