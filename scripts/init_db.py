import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from sqlalchemy.ext.asyncio import create_async_engine
from core.config import settings
from core.exceptions import ConfigurationError
from core.logging import setup_logging
# Import all models to ensure they are registered
import models  # noqa: F401
from models.base import CoreBase, MediamineBase

logger = logging.getLogger(__name__)


async def create_store(name: str, url: str, metadata) -> None:
    logger.info(f"Connecting to {name} store...")
    engine = create_async_engine(url)

    async with engine.begin() as conn:
        logger.info(f"Creating {name} tables...")
        await conn.run_sync(metadata.create_all)
        logger.info(f"{len(metadata.tables)} {name} tables ready.")

    await engine.dispose()


async def init_database():
    missing = [name for name in ("CORE_DATABASE_URL", "MEDIAMINE_DATABASE_URL") if not getattr(settings, name)]
    if missing:
        raise ConfigurationError(f"Missing settings: {', '.join(missing)}")

    await create_store("core", settings.CORE_DATABASE_URL, CoreBase.metadata)
    await create_store("mediamine", settings.MEDIAMINE_DATABASE_URL, MediamineBase.metadata)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(init_database())
