"""Feature-flag clients used for the storefront A/B experiments.

Two implementations share the :class:`FeatureFlagClient` protocol:

* :class:`UnleashFeatureFlags` wraps the official ``UnleashClient`` SDK and
  is selected when ``UNLEASH_URL`` is configured.
* :class:`StaticFeatureFlags` answers from the ``FEATURE_FLAGS`` setting,
  which keeps local development and the test-suite independent of a flag
  server.

Flag lookups happen on the request path, so a failing lookup is logged and
reported as *disabled* rather than turned into a 500.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from UnleashClient import UnleashClient

from scalyshop.settings import AppSettings

logger = logging.getLogger(__name__)

PRODUCT_SORT_BY_PRICE_FLAG = "product-sort-by-price"


class FeatureFlagClient(Protocol):
    def start(self) -> None: ...

    def close(self) -> None: ...

    def is_enabled(
        self, name: str, context: Mapping[str, Any] | None = None
    ) -> bool: ...


class StaticFeatureFlags:
    """Flags fixed at construction time."""

    def __init__(self, enabled: Iterable[str] = ()) -> None:
        self._enabled = frozenset(enabled)

    def start(self) -> None:
        logger.info(
            "Using static feature flags: %s",
            ", ".join(sorted(self._enabled)) or "(none enabled)",
        )

    def close(self) -> None:
        return None

    def is_enabled(self, name: str, context: Mapping[str, Any] | None = None) -> bool:
        return name in self._enabled


class UnleashFeatureFlags:
    """Adapter around :class:`UnleashClient.UnleashClient`.

    ``start`` performs the initial fetch and launches the SDK's background
    refresh job; it blocks on network I/O and is therefore run in a worker
    thread by the application lifespan.
    """

    def __init__(self, client: UnleashClient) -> None:
        self._client = client
        self._started = False

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "UnleashFeatureFlags":
        if not settings.unleash_url:
            raise ValueError("UNLEASH_URL must be configured to use Unleash feature flags")
        client = UnleashClient(
            url=settings.unleash_url,
            app_name=settings.unleash_app_name,
            instance_id=settings.unleash_instance_id or settings.unleash_app_name,
            refresh_interval=settings.unleash_refresh_interval,
        )
        return cls(client)

    def start(self) -> None:
        self._client.initialize_client()
        self._started = True
        logger.info("Unleash feature flag client initialized")

    def close(self) -> None:
        if self._started:
            self._client.destroy()
            self._started = False

    def is_enabled(self, name: str, context: Mapping[str, Any] | None = None) -> bool:
        try:
            return bool(self._client.is_enabled(name, dict(context or {})))
        except Exception:
            logger.exception("Feature flag lookup failed for %s; treating as disabled", name)
            return False


def create_feature_flags(settings: AppSettings) -> FeatureFlagClient:
    """Pick the flag client matching the configuration."""

    if settings.unleash_url:
        return UnleashFeatureFlags.from_settings(settings)
    return StaticFeatureFlags(settings.enabled_feature_flags)


__all__ = [
    "PRODUCT_SORT_BY_PRICE_FLAG",
    "FeatureFlagClient",
    "StaticFeatureFlags",
    "UnleashFeatureFlags",
    "create_feature_flags",
]
