"""Centralized configuration management for the ScalyShop backend."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every consumer importing :mod:`scalyshop.settings`
# observes the same values.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/scalyshop.db"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_UNLEASH_APP_NAME = "scalyshop-v2-backend"
DEFAULT_UNLEASH_REFRESH_INTERVAL = 15


def _split_csv(value: str | None) -> list[str]:
    """Split a comma separated value into trimmed, non-empty entries."""

    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Besides the raw environment values the class exposes a few derived
    helpers (resolved database URL, numeric log level, enabled feature flags)
    so downstream modules never repeat the parsing logic.
    """

    _explicit_cors_allow_origins: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_cors_allow_origins = (
            "cors_allow_origins_raw" in normalized_keys
            or "cors_allow_origins" in normalized_keys
        )
        cors_env = os.getenv("CORS_ALLOW_ORIGINS")
        if cors_env is not None and cors_env.strip():
            self._explicit_cors_allow_origins = True

    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "Full SQLAlchemy-compatible database URL. Postgres URLs supplied in"
            " sync format (postgres:// or postgresql://) are coerced into the"
            " async psycopg driver string at runtime."
        ),
    )
    use_sqlite: bool = Field(
        default=False,
        alias="USE_SQLITE",
        description="Force SQLite usage regardless of DATABASE_URL.",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of additional CORS origins.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    slow_query_threshold: float = Field(
        default=0.1,
        alias="SLOW_QUERY_THRESHOLD",
        description="Seconds after which SQL statements are logged as slow.",
    )
    metrics_default_collectors: bool = Field(
        default=True,
        alias="METRICS_DEFAULT_COLLECTORS",
        description=(
            "Register the process, platform and GC collectors on the metrics"
            " registry in addition to the shop metrics."
        ),
    )
    unleash_url: str | None = Field(
        default=None,
        alias="UNLEASH_URL",
        description="Unleash API endpoint. Static flags are used when unset.",
    )
    unleash_app_name: str = Field(
        default=DEFAULT_UNLEASH_APP_NAME,
        alias="UNLEASH_APP_NAME",
    )
    unleash_instance_id: str | None = Field(
        default=None,
        alias="UNLEASH_INSTANCE_ID",
        description="Instance identifier (GitLab uses it as the access token).",
    )
    unleash_refresh_interval: int = Field(
        default=DEFAULT_UNLEASH_REFRESH_INTERVAL,
        alias="UNLEASH_REFRESH_INTERVAL",
        ge=1,
    )
    feature_flags_raw: str | None = Field(
        default=None,
        alias="FEATURE_FLAGS",
        description="Comma-separated flags treated as enabled without Unleash.",
    )

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL after applying fallbacks."""

        if self.use_sqlite or not self.database_url:
            return DEFAULT_SQLITE_DATABASE_URL

        url = self.database_url.strip()

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        if url.startswith(POSTGRES_ASYNC_PREFIX) or url.startswith("sqlite+aiosqlite://"):
            return url

        raise RuntimeError(
            f"Expected a PostgreSQL connection string or SQLite fallback, received: {url}"
        )

    @property
    def database_type(self) -> str:
        """Return ``sqlite`` when using SQLite otherwise ``postgresql``."""

        if self.resolved_database_url.startswith("sqlite"):
            return "sqlite"
        return "postgresql"

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins supplied via environment variables."""

        return [origin.rstrip("/") for origin in _split_csv(self.cors_allow_origins_raw)]

    @property
    def enabled_feature_flags(self) -> frozenset[str]:
        return frozenset(_split_csv(self.feature_flags_raw))

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self.database_url and not self.use_sqlite:
            warnings.append(
                "DATABASE_URL is not set - falling back to the local SQLite database"
            )

        if not self._explicit_cors_allow_origins and not self.cors_allow_origins:
            warnings.append(
                "CORS_ALLOW_ORIGINS is not set - using default localhost origins only "
                "(may cause CORS issues in production)"
            )

        if not self.unleash_url:
            warnings.append(
                "UNLEASH_URL is not set - feature flags are read from FEATURE_FLAGS"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


# Module-level singleton; the getter remains available for tests that prefer
# dependency injection.
settings = get_settings()

__all__ = [
    "AppSettings",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SQLITE_DATABASE_URL",
    "DEFAULT_UNLEASH_APP_NAME",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "get_settings",
    "settings",
]
