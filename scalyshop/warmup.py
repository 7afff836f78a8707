"""Startup helpers that prepare shared resources before the first request.

Warmup failures are logged rather than raised: the API still starts and the
affected requests surface the underlying error through the regular exception
handlers.
"""

from __future__ import annotations

import asyncio
import logging
import time

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from scalyshop.db.connection import init_models
from scalyshop.observability import FeatureFlagClient

logger = logging.getLogger(__name__)


async def warmup_database(engine: AsyncEngine) -> None:
    """Create missing tables and open a first pooled connection."""
    try:
        start = time.perf_counter()
        await init_models(engine)
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        elapsed = (time.perf_counter() - start) * 1000
        logger.info("Database connection warmed up (%.0fms)", elapsed)
    except Exception as e:
        logger.warning(f"Database warmup failed: {e}")


async def warmup_feature_flags(flags: FeatureFlagClient) -> None:
    """Start the flag client in a worker thread; its SDK blocks on network I/O."""
    try:
        await asyncio.to_thread(flags.start)
    except Exception as e:
        logger.warning(f"Feature flag warmup failed, flags default to disabled: {e}")


async def warmup_all(engine: AsyncEngine, flags: FeatureFlagClient) -> None:
    logger.info("Starting backend warmup...")
    start = time.perf_counter()
    await asyncio.gather(warmup_database(engine), warmup_feature_flags(flags))
    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Backend warmup complete (%.0fms total)", elapsed)
