"""
Database session management with SQLAlchemy async.

The API talks to two independent databases: the core store (publications,
feeds, regions, tags, users) and the mediamine store (journalists and their
taxonomies). Each one is wrapped in a Store that the application opens on
startup and disposes on shutdown.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
import logging

logger = logging.getLogger(__name__)


class Store:
    """One database: an engine plus its session factory."""

    def __init__(self, name: str, url: str, pool_size: int = 5, echo: bool = False):
        self.name = name
        self.url = url
        self.pool_size = pool_size
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_maker: Optional[async_sessionmaker] = None

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self) -> None:
        if self.engine is not None:
            return

        engine_options = {"echo": self.echo, "future": True}
        if self.url.startswith("sqlite"):
            engine_options["poolclass"] = NullPool
        else:
            engine_options["pool_size"] = self.pool_size
            engine_options["pool_pre_ping"] = True

        self.engine = create_async_engine(self.url, **engine_options)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False
        )
        logger.info(f"Opened {self.name} store")

    async def close(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_maker = None
        logger.info(f"Closed {self.name} store")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self.session_maker is None:
            raise RuntimeError(f"{self.name} store is not open. Call open() on startup.")
        async with self.session_maker() as session:
            yield session

    async def ping(self) -> bool:
        """Run SELECT 1; False on any connection failure."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"{self.name} store connection failed: {str(e)}")
            return False


class Stores:
    """The pair of stores the API works against."""

    def __init__(self, core: Store, mediamine: Store):
        self.core = core
        self.mediamine = mediamine

    def open(self) -> None:
        self.core.open()
        self.mediamine.open()

    async def close(self) -> None:
        await self.core.close()
        await self.mediamine.close()
