"""
Engine and session factory.

Postgres runs through asyncpg with a tuned pool; SQLite (tests, local
demos) runs through aiosqlite, which does not accept pool sizing.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from agri_inventory.core.config import settings
from agri_inventory.core.logging import logger
from agri_inventory.models import Base


def engine_options() -> Dict[str, Any]:
    database = settings.database
    options: Dict[str, Any] = {"echo": settings.debug, "future": True}
    if database.is_sqlite:
        return options
    options.update(
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_recycle=database.pool_recycle,
        pool_pre_ping=True,
    )
    return options


engine = create_async_engine(settings.database.url, **engine_options())

AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; anything raised inside the request rolls it back."""
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as exc:
            logger.error(f"Rolling back session after error: {exc}")
            await db.rollback()
            raise


async def init_models() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")
