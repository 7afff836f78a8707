"""Base repository utilities shared across repository implementations."""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseRepository:
    """Base repository providing common functionality for all repositories."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _upsert_insert(self, model: type[Any]) -> Any:
        """Return the dialect-specific ``INSERT`` supporting ``ON CONFLICT``.

        Both supported backends expose ``on_conflict_do_update`` with
        ``RETURNING``; any other dialect is a configuration error.
        """

        dialect = self._session.get_bind().dialect.name
        try:
            factory = _UPSERT_INSERTS[dialect]
        except KeyError:
            raise RuntimeError(
                f"Atomic upserts are not supported for the '{dialect}' dialect"
            ) from None
        return factory(model)
