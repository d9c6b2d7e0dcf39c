"""
Migrations for one store at a time:

    alembic -x store=core upgrade head
    alembic -x store=mediamine upgrade head
"""

import asyncio
from logging.config import fileConfig
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from core.config import settings
import models  # noqa: F401  registers every table on its base
from models.base import CoreBase, MediamineBase

# Alembic Config object
config = context.config

# Logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

STORES = {
    "core": (CoreBase.metadata, lambda: settings.CORE_DATABASE_URL),
    "mediamine": (MediamineBase.metadata, lambda: settings.MEDIAMINE_DATABASE_URL),
}

store = context.get_x_argument(as_dictionary=True).get("store", "core")
if store not in STORES:
    raise SystemExit(f"Unknown store {store!r}; use -x store=core or -x store=mediamine")

target_metadata, database_url = STORES[store]


def run_migrations_offline():
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    connectable = async_engine_from_config(
        {
            "sqlalchemy.url": database_url()
        },
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
