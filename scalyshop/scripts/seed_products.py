#!/usr/bin/env python
"""Seed the product catalogue from a JSONL file.

Each line is a JSON object with ``name``, ``price`` and optional
``description``.  Lines whose price is not a valid shop price are skipped
and reported.

Usage:
    python -m scalyshop.scripts.seed_products ./data/fixtures/products.jsonl
    python -m scalyshop.scripts.seed_products ./data/fixtures/products.jsonl --limit 50
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from scalyshop.db.connection import (
    dispose_engine,
    get_async_session_context,
    get_engine,
    init_models,
)
from scalyshop.db.repositories import ProductRepository
from scalyshop.utils.validators import MAX_PRICE, is_valid_price, parse_price

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    inserted: int = 0
    skipped: list[tuple[int, str]] = field(default_factory=list)


def iter_records(path: Path, limit: int | None = None) -> Iterator[tuple[int, dict[str, Any]]]:
    """Yield ``(line_number, record)`` pairs, ignoring blank lines."""
    yielded = 0
    with path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if limit is not None and yielded >= limit:
                return
            stripped = line.strip()
            if not stripped:
                continue
            yield line_number, json.loads(stripped)
            yielded += 1


async def seed_products(
    session: AsyncSession,
    records: Iterator[tuple[int, dict[str, Any]]],
) -> SeedReport:
    """Insert every record with a name and a valid price."""
    repository = ProductRepository(session)
    report = SeedReport()

    for line_number, record in records:
        name = str(record.get("name") or "").strip()
        price = record.get("price")
        if not name:
            report.skipped.append((line_number, "missing name"))
            continue
        amount = parse_price(price)
        if amount is None:
            reason = (
                f"price {price!r} exceeds {MAX_PRICE}"
                if is_valid_price(price)
                else f"invalid price {price!r}"
            )
            report.skipped.append((line_number, reason))
            continue

        await repository.create_product(
            name=name,
            price=amount,
            description=record.get("description"),
        )
        report.inserted += 1

    await session.commit()
    return report


async def main(path: Path, limit: int | None) -> int:
    if not path.exists():
        logger.error("Seed file not found: %s", path)
        return 1

    engine = get_engine()
    try:
        await init_models(engine)
        async with get_async_session_context() as session:
            report = await seed_products(session, iter_records(path, limit))
    finally:
        await dispose_engine()

    for line_number, reason in report.skipped:
        logger.warning("Skipped line %s: %s", line_number, reason)
    logger.info(
        "Seeded %s products (%s skipped) from %s",
        report.inserted,
        len(report.skipped),
        path,
    )
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed products from a JSONL file.")
    parser.add_argument("path", type=Path, help="JSONL file with one product per line")
    parser.add_argument("--limit", type=int, default=None, help="Maximum records to load")
    return parser.parse_args(argv)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = parse_args()
    sys.exit(asyncio.run(main(args.path, args.limit)))
