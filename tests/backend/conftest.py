"""Shared backend test fixtures for asynchronous database access and HTTP calls."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from scalyshop.db.connection import get_db
from scalyshop.db.models import Base, Product
from scalyshop.db.repositories import ProductRepository
from scalyshop.observability import ObservabilityContext, ShopMetrics, StaticFeatureFlags

ProductFactory = Callable[..., Awaitable[Product]]


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    """Provide an in-memory SQLite session for integration-style tests."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async_session = async_sessionmaker(engine, expire_on_commit=False)
    async with async_session() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()
    await engine.dispose()


@pytest.fixture
def enabled_flags() -> set[str]:
    """Feature flags switched on for the test; parametrize ``enabled_flags`` to change it."""
    return set()


@pytest.fixture
def observability(enabled_flags: set[str]) -> ObservabilityContext:
    """A context with its own registry so counters start at zero in every test."""
    return ObservabilityContext(
        metrics=ShopMetrics(default_collectors=False),
        flags=StaticFeatureFlags(enabled_flags),
    )


@pytest.fixture
def product_factory(session: AsyncSession) -> ProductFactory:
    """Persist products through the repository with sensible defaults."""

    async def _create(
        name: str = "Scaly Mug",
        price: str = "10.99",
        description: str | None = None,
    ) -> Product:
        repository = ProductRepository(session)
        return await repository.create_product(
            name=name, price=Decimal(price), description=description
        )

    return _create


@pytest_asyncio.fixture
async def client(
    session: AsyncSession, observability: ObservabilityContext
) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client bound to the app with the test session and observability context."""
    from scalyshop.main import app

    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    previous_observability = app.state.observability
    app.dependency_overrides[get_db] = _override_get_db
    app.state.observability = observability

    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
            yield http
    finally:
        app.dependency_overrides.clear()
        app.state.observability = previous_observability
