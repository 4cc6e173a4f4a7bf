#!/usr/bin/env python3
"""
Database Reset Script

Drops and recreates the PostgreSQL database named in DATABASE_URL_ASYNC,
then migrates it to the latest revision. Seeding is separate:
`python script/seed_data.py`.
"""

import asyncio
import sys

from sqlalchemy import make_url, text
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.alembic.commands import upgrade
from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


MAINTENANCE_DB = 'postgres'


def _target_url() -> URL:
    url = make_url(settings.DATABASE_URL_ASYNC)
    if url.get_backend_name() != 'postgresql':
        raise RuntimeError(f'Reset only supports PostgreSQL, got {url.get_backend_name()}')
    if not url.database:
        raise RuntimeError('DATABASE_URL_ASYNC has no database name')
    return url


async def recreate_database(url: URL) -> None:
    db_name = url.database
    # DROP/CREATE DATABASE cannot run inside a transaction block
    admin_engine = create_async_engine(
        url.set(database=MAINTENANCE_DB), isolation_level='AUTOCOMMIT'
    )
    try:
        async with admin_engine.connect() as conn:
            await conn.execute(
                text(
                    """
                    SELECT pg_terminate_backend(pid)
                    FROM pg_stat_activity
                    WHERE datname = :db_name AND pid <> pg_backend_pid()
                    """
                ),
                {'db_name': db_name},
            )
            await conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            Logger.base.info(f"🗑️  [RESET] Database '{db_name}' dropped")

            await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            Logger.base.info(f"🏗️  [RESET] Database '{db_name}' created")
    finally:
        await admin_engine.dispose()


def main() -> int:
    url = _target_url()
    Logger.base.info(f'🔄 [RESET] Resetting {url.render_as_string(hide_password=True)}')

    asyncio.run(recreate_database(url))

    # Alembic's env.py runs its own event loop, so migrate after ours has closed
    if upgrade() != 0:
        Logger.base.error('❌ [RESET] Migration failed')
        return 1

    Logger.base.info('✅ [RESET] Done. Seed sample data with: python script/seed_data.py')
    return 0


if __name__ == '__main__':
    sys.exit(main())
