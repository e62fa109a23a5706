from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from roombook.app.core.config import settings


# No connection is opened until the first query, so memory-backed runs never touch Postgres
engine = create_async_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
)

SessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped AsyncSession; the document store opens one transaction per call."""
    async with SessionLocal() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections on shutdown."""
    await engine.dispose()
