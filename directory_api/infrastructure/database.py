"""Database configuration and session management.

Provides async SQLAlchemy engine and session factory.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from directory_api.infrastructure.config import settings

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create database tables if they don't exist.

    On PostgreSQL the pg_trgm extension is enabled first, since the
    trigram search indexes depend on it.

    Args:
        bind: Engine to use (defaults to the application engine).
    """
    # Models must be registered on Base.metadata before create_all.
    import directory_api.catalog.models  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text("CREATE EXTENSION IF NOT EXISTS pg_trgm"))
        await conn.run_sync(Base.metadata.create_all)


async def check_database(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> bool:
    """Check that the database answers a trivial query.

    Args:
        session_factory: Session factory to use.

    Returns:
        True if the database is reachable.
    """
    factory = session_factory or async_session_factory
    async with factory() as session:
        result = await session.execute(text("SELECT 1"))
        return result.scalar_one() == 1
