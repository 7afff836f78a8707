"""SQLAlchemy ORM models for the product catalogue and the favorites list."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from scalyshop.utils.validators import PRICE_PRECISION, PRICE_SCALE


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def new_object_id() -> str:
    return uuid.uuid4().hex


class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_object_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(
        Numeric(PRICE_PRECISION, PRICE_SCALE),
        nullable=False,
        index=True,
        doc="Indexed for the price-ordered catalogue listing",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )


class Favorite(Base):
    """A product marked as favorite.

    ``product_id`` carries a unique index: the add operation relies on it as
    the conflict target of a single ``INSERT ... ON CONFLICT DO UPDATE``
    statement, which is what keeps one row per product under concurrent adds.
    """

    __tablename__ = "favorites"

    # Integer surrogate key doubles as the storage order used by listings.
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, default=new_object_id
    )
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


__all__ = ["Base", "Favorite", "Product", "new_object_id", "utcnow"]
