"""
Database connection and session management.

Key concepts:
- We use SQLAlchemy 2.0's async API (aiosqlite for SQLite, asyncpg for
  PostgreSQL)
- AsyncSession gives us non-blocking database calls, so one slow query
  doesn't hold up other requests
- get_db() is a "dependency" that FastAPI injects into route handlers —
  it provides a session and ensures cleanup after each request
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from video_api.config import settings


def _engine_options(url: str) -> dict:
    """Pool settings per backend.

    SQLite picks its own pool class (in-memory databases need a single
    shared connection), so sizing only applies to server databases.
    """
    if url.startswith("sqlite"):
        return {}
    return {"pool_size": 5, "max_overflow": 10}


# Create the async engine
# - echo=True logs all SQL (set DEBUG=true while developing)
engine = create_async_engine(
    settings.async_database_url,
    echo=settings.DEBUG,
    **_engine_options(settings.async_database_url),
)

# Session factory — creates new database sessions
# - expire_on_commit=False means objects stay usable after commit
#   (without this, accessing an attribute after commit triggers a lazy load,
#    which fails with async)
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


async def get_db():
    """FastAPI dependency that provides a database session.

    Usage in a route:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...

    The session is closed when the request finishes, even if an error
    occurs.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    """Create all tables (and their indexes) defined by our models.

    Called once at startup. Safe to run repeatedly — existing tables
    are left alone.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
