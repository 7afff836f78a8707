"""Tests for the feature flag clients and their selection from settings."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from scalyshop.observability import feature_flags
from scalyshop.observability.feature_flags import (
    PRODUCT_SORT_BY_PRICE_FLAG,
    StaticFeatureFlags,
    UnleashFeatureFlags,
    create_feature_flags,
)
from scalyshop.settings import AppSettings


class _FakeUnleashClient:
    """Stands in for ``UnleashClient.UnleashClient`` without network access."""

    instances: list[_FakeUnleashClient] = []

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.enabled: set[str] = set()
        self.initialized = False
        self.destroyed = False
        self.error: Exception | None = None
        self.contexts: list[dict[str, Any]] = []
        _FakeUnleashClient.instances.append(self)

    def initialize_client(self) -> None:
        self.initialized = True

    def destroy(self) -> None:
        self.destroyed = True

    def is_enabled(self, name: str, context: dict[str, Any]) -> bool:
        self.contexts.append(context)
        if self.error is not None:
            raise self.error
        return name in self.enabled


@pytest.fixture
def fake_unleash(monkeypatch: pytest.MonkeyPatch) -> type[_FakeUnleashClient]:
    _FakeUnleashClient.instances = []
    monkeypatch.setattr(feature_flags, "UnleashClient", _FakeUnleashClient)
    return _FakeUnleashClient


def _settings(**values: Any) -> AppSettings:
    return AppSettings(_env_file=None, **values)


def test_static_flags_answer_from_configuration() -> None:
    flags = StaticFeatureFlags({PRODUCT_SORT_BY_PRICE_FLAG})

    assert flags.is_enabled(PRODUCT_SORT_BY_PRICE_FLAG) is True
    assert flags.is_enabled("dark-mode") is False


def test_static_flags_are_selected_without_unleash_url(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("UNLEASH_URL", raising=False)

    flags = create_feature_flags(_settings(feature_flags_raw=PRODUCT_SORT_BY_PRICE_FLAG))

    assert isinstance(flags, StaticFeatureFlags)
    assert flags.is_enabled(PRODUCT_SORT_BY_PRICE_FLAG)


def test_unleash_client_built_from_settings(fake_unleash) -> None:
    settings = _settings(
        unleash_url="https://gitlab.example.com/api/v4/feature_flags/unleash/42",
        unleash_instance_id="token-123",
        unleash_refresh_interval=30,
    )

    flags = create_feature_flags(settings)

    assert isinstance(flags, UnleashFeatureFlags)
    (client,) = fake_unleash.instances
    assert client.kwargs == {
        "url": "https://gitlab.example.com/api/v4/feature_flags/unleash/42",
        "app_name": "scalyshop-v2-backend",
        "instance_id": "token-123",
        "refresh_interval": 30,
    }


def test_unleash_requires_url() -> None:
    with pytest.raises(ValueError, match="UNLEASH_URL"):
        UnleashFeatureFlags.from_settings(_settings(unleash_url=None))


def test_unleash_lifecycle(fake_unleash) -> None:
    client = fake_unleash()
    flags = UnleashFeatureFlags(client)

    flags.close()
    assert client.destroyed is False

    flags.start()
    client.enabled.add(PRODUCT_SORT_BY_PRICE_FLAG)
    assert client.initialized is True
    assert flags.is_enabled(PRODUCT_SORT_BY_PRICE_FLAG, {"userId": "u-1"}) is True
    assert client.contexts[-1] == {"userId": "u-1"}

    flags.close()
    assert client.destroyed is True


def test_unleash_errors_read_as_disabled(
    fake_unleash, caplog: pytest.LogCaptureFixture
) -> None:
    client = fake_unleash()
    client.error = RuntimeError("connection reset")
    flags = UnleashFeatureFlags(client)

    with caplog.at_level(logging.ERROR, logger=feature_flags.logger.name):
        assert flags.is_enabled(PRODUCT_SORT_BY_PRICE_FLAG) is False

    assert "treating as disabled" in caplog.text
