"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine + session maker per database URL
2. Base: declarative base for all ORM models
3. Database: DI-friendly wrapper exposing `session()` and `session_maker`

PostgreSQL (asyncpg) is the production target. SQLite (aiosqlite) URLs are
accepted for local runs and tests; pool sizing options are skipped for them.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# =============================================================================
# Event-loop-aware Engine Manager
# =============================================================================


class AsyncEngineManager:
    """
    Manages a SQLAlchemy async engine with event loop awareness.

    Ensures the engine is always bound to the current event loop to prevent
    "Task got Future attached to a different loop" errors (pytest creates a
    fresh loop per test).
    """

    def __init__(self, db_url: str):
        self._db_url = db_url
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return self._db_url.startswith('sqlite')

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop running, create engine without loop tracking
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, recreating engine')
                self._session_maker = None
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        return self._engine  # type: ignore[return-value]

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
            self._loop = None

    def _create_engine(self) -> AsyncEngine:
        options: dict[str, Any] = {'echo': False}
        if not self.is_sqlite:
            options |= {
                'pool_size': settings.DB_POOL_SIZE,
                'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
                'pool_timeout': settings.DB_POOL_TIMEOUT,
                'pool_recycle': settings.DB_POOL_RECYCLE,
                'pool_pre_ping': settings.DB_POOL_PRE_PING,
            }
        return create_async_engine(self._db_url, **options)


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Database Class (DI)
# =============================================================================


class Database:
    """
    Database handle for the dependency injection container

    One instance per database URL; delegates to AsyncEngineManager for
    event-loop-aware engine management.
    """

    def __init__(self, *, db_url: str | None = None) -> None:
        self._engine_manager = AsyncEngineManager(db_url or settings.DATABASE_URL_ASYNC)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine_manager.get_engine()

    def session_maker(self) -> AsyncSession:
        """Create a new AsyncSession (caller owns its lifecycle)"""
        return self._engine_manager.get_session_maker()()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: Automatically handles rollback on exception
        """
        async with self._engine_manager.get_session_maker()() as session:
            yield session

    async def create_tables(self) -> None:
        """Create database tables if they don't exist (dev/test; production uses Alembic)"""
        # Register all models on Base.metadata
        import src.service.booking.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️  [DB] Tables ensured')

    async def drop_tables(self) -> None:
        import src.service.booking.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self._engine_manager.dispose()
