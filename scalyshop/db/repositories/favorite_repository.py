"""Persistence for favorite products.

Every mutation is a single SQL statement so the database, not this module,
guarantees atomicity:

* ``upsert`` issues ``INSERT ... ON CONFLICT (product_id) DO UPDATE ...
  RETURNING`` against the unique ``product_id`` index.
* ``delete_by_product_id`` issues ``DELETE ... RETURNING`` and reports the
  removed row, if any.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select

from scalyshop.db.models import Favorite, new_object_id, utcnow
from scalyshop.db.repositories.base import BaseRepository


class FavoriteRepository(BaseRepository):
    """Encapsulates SQLAlchemy operations for the ``favorites`` table."""

    async def list_favorites(self) -> Sequence[Favorite]:
        """Return every favorite in storage order."""

        result = await self._session.scalars(select(Favorite).order_by(Favorite.seq))
        return result.all()

    async def upsert(self, product_id: str) -> Favorite:
        """Create the favorite for ``product_id`` or refresh the existing row."""

        now = utcnow()
        insert_stmt = self._upsert_insert(Favorite).values(
            id=new_object_id(),
            product_id=product_id,
            created_at=now,
            updated_at=now,
        )
        stmt = insert_stmt.on_conflict_do_update(
            index_elements=[Favorite.product_id],
            set_={
                "product_id": insert_stmt.excluded.product_id,
                "updated_at": now,
            },
        ).returning(Favorite)

        result = await self._session.scalars(
            stmt, execution_options={"populate_existing": True}
        )
        return result.one()

    async def delete_by_product_id(self, product_id: str) -> Favorite | None:
        """Delete the favorite for ``product_id`` and return it when it existed."""

        stmt = (
            delete(Favorite)
            .where(Favorite.product_id == product_id)
            .returning(Favorite)
        )
        result = await self._session.scalars(stmt)
        return result.one_or_none()
