from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from movingco.core.config import settings

_engine: Optional[AsyncEngine] = None
_SessionLocal: Optional[async_sessionmaker] = None


def _ensure_engine() -> None:
    global _engine, _SessionLocal
    if _engine is None:
        engine_kwargs = {"echo": settings.DEBUG, "future": True}
        if not settings.DATABASE_URL.startswith("sqlite"):
            engine_kwargs.update(pool_size=settings.DB_POOL_SIZE, max_overflow=settings.DB_MAX_OVERFLOW)
        _engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)
        _SessionLocal = async_sessionmaker(_engine, class_=AsyncSession, expire_on_commit=False)


def get_engine() -> AsyncEngine:
    _ensure_engine()
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    _ensure_engine()
    return _SessionLocal


async def get_db() -> AsyncIterator[AsyncSession]:
    _ensure_engine()
    async with _SessionLocal() as session:
        yield session


async def ping_database() -> bool:
    async with get_engine().connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


async def dispose_engine() -> None:
    global _engine, _SessionLocal
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _SessionLocal = None
