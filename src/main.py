"""
Production FastAPI Application

Run with: uvicorn src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Booking Service] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Booking Service] Dependency injection wired')

    config = container.config_service()
    if config.STORAGE_BACKEND == 'sqlalchemy':
        database = container.database()
        if config.DB_CREATE_TABLES_ON_STARTUP:
            await database.create_tables()
        Logger.base.info('🗄️  [Booking Service] Database engine ready')
    else:
        Logger.base.info('🧠 [Booking Service] Using in-memory storage')

    Logger.base.info('✅ [Booking Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Booking Service] Shutting down...')

    if config.STORAGE_BACKEND == 'sqlalchemy':
        await container.database().dispose()
        Logger.base.info('🗄️  [Booking Service] Database engine disposed')

    # Unwire DI
    container.unwire()

    Logger.base.info('👋 [Booking Service] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
