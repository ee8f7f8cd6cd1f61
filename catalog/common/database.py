import logging
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from .config import settings
from .db import Base
from ..categories.model import Category
from ..products.model import Product  # noqa: F401  (registers the products table)

log = logging.getLogger(__name__)


def _build_engine(url: str) -> AsyncEngine:
    kwargs = {"future": True, "echo": settings.DB_ECHO}
    if url.startswith("sqlite") and ":memory:" in url:
        # One shared connection, otherwise every checkout sees an empty database.
        kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    return create_async_engine(url, **kwargs)


# Async SQLAlchemy engine and session factory
engine = _build_engine(settings.DB_URL)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@event.listens_for(engine.sync_engine, "connect")
def _sqlite_pragmas(dbapi_conn, _record):
    if engine.dialect.name != "sqlite":
        return
    cursor = dbapi_conn.cursor()
    # Restrict category deletes and keep LIKE case-sensitive as on other engines.
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()


async def init_db(seed: Optional[bool] = None) -> None:
    if seed is None:
        seed = settings.SEED_DATA

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not seed:
        return

    # Seed categories and sample products if the catalog is empty
    from ..seed import seed_catalog

    async with AsyncSessionLocal() as session:
        res = await session.execute(sa.select(sa.func.count(Category.id)))
        count = int(res.scalar() or 0)
        if count == 0:
            added = await seed_catalog(session)
            await session.commit()
            log.info("Seeded catalog with %s products.", added)


async def drop_db() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def close_db() -> None:
    await engine.dispose()
