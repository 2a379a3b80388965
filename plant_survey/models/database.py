"""Database setup and session management using SQLAlchemy 2.0 asyncio.

This module configures the async engine, session factory, and base class
for all ORM models. Repositories open one session per read so independent
reads can run concurrently.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from plant_survey.config import get_settings


class Base(DeclarativeBase):
    """Base class for all ORM models.

    Uses SQLAlchemy 2.0's DeclarativeBase for modern type-safe models.
    All models should inherit from this class.
    """
    pass


# Get database URL from settings
settings = get_settings()

engine_kwargs: Dict[str, Any] = {
    "pool_pre_ping": True,  # Verify connections before using
    "echo": False,
}

# SQLite doesn't support pool_size/max_overflow
if not settings.database_url.startswith("sqlite"):
    engine_kwargs["pool_size"] = settings.database_pool_size
    engine_kwargs["max_overflow"] = settings.database_max_overflow

engine: AsyncEngine = create_async_engine(settings.database_url, **engine_kwargs)

# Create session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,  # Prevent lazy loading after commit
)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency function for FastAPI to provide the session factory.

    Returns:
        async_sessionmaker: Factory that repositories use to open sessions

    Example:
        @app.get("/example")
        async def example_route(factory=Depends(get_session_factory)):
            async with factory() as session:
                ...
    """
    return AsyncSessionLocal


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create all tables that do not exist yet.

    Args:
        bind: Engine to create the tables on
    """
    # Import models so they are registered on Base.metadata
    from plant_survey.models import partner, plant, question, response, rule  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
