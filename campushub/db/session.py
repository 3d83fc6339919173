from typing import Optional
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from campushub.core.config import settings
from campushub.core.logging import logger

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Store handle owning the async engine and session factory.

    Created and disposed by the process entry point and passed explicitly to
    whatever needs the store; nothing connects at import time.
    """

    def __init__(self, url: Optional[str] = None, **engine_kwargs):
        self.url = url or settings.DATABASE_URL
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None

    async def connect(self) -> None:
        if self.engine is not None:
            return
        kwargs = dict(echo=settings.DB_ECHO, pool_pre_ping=True)
        if not self.url.startswith("sqlite") and "poolclass" not in self.engine_kwargs:
            kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_recycle=settings.DB_POOL_RECYCLE,
            )
        kwargs.update(self.engine_kwargs)
        self.engine = create_async_engine(self.url, **kwargs)
        if self.url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._sessionmaker = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        logger.info(f"Database engine created ({self.engine.dialect.name})")

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @property
    def dialect(self) -> str:
        if self.engine is None:
            raise RuntimeError("Database is not connected")
        return self.engine.dialect.name

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        return self._sessionmaker()
