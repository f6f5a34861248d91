"""Shared fixtures: a throwaway SQLite catalog and a small seeded scenario."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from directory_api.catalog.models import Listing, RefKey
from directory_api.catalog.repository import CatalogRepository
from directory_api.infrastructure.database import create_tables


@dataclass
class Scenario:
    """Keys of the rows inserted by the ``scenario`` fixture."""

    austin: RefKey
    denver: RefKey
    coffee: RefKey
    plumber: RefKey


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a file-backed SQLite engine with foreign keys enforced.

    A file (not :memory:) gives every session its own connection, like a
    real pool.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test catalog."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def scenario(session_factory: async_sessionmaker[AsyncSession]) -> Scenario:
    """Seed a small hand-written catalog.

    Austin has one coffee shop (Joe's, rating 5); Denver has three plumbers
    with ratings 2, 4 and 3.
    """
    async with session_factory() as session:
        repo = CatalogRepository(session)
        austin, denver = await repo.insert_locations([
            {"slug": "austin", "name": "Austin", "state": "TX"},
            {"slug": "denver", "name": "Denver", "state": "CO"},
        ])
        coffee, plumber = await repo.insert_categories([
            {
                "slug": "coffee-shop",
                "name": "coffee-shop",
                "template_data": {"heroText": "Best coffee in {city}"},
            },
            {"slug": "plumber", "name": "Plumber", "template_data": None},
        ])
        await repo.insert_listings([
            Listing.row_for_pair(
                austin,
                coffee,
                name="Joe's",
                slug="joes-0",
                description="Espresso and pastries downtown.",
                rating=5,
            ),
            Listing.row_for_pair(
                denver,
                plumber,
                name="Rocky Pipes",
                slug="rocky-pipes-1",
                description="Emergency repairs.",
                rating=2,
            ),
            Listing.row_for_pair(
                denver,
                plumber,
                name="Mile High Plumbing",
                slug="mile-high-plumbing-2",
                description="Water heaters and drains.",
                rating=4,
            ),
            Listing.row_for_pair(
                denver,
                plumber,
                name="Front Range Flow",
                slug="front-range-flow-3",
                description="Family owned.",
                rating=3,
            ),
        ])
        await session.commit()

    return Scenario(austin=austin, denver=denver, coffee=coffee, plumber=plumber)
