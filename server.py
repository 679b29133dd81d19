#!/usr/bin/env python3
"""
Chorus FastAPI Server

Batch speech generation against a hosted TTS API.
Provides async API endpoints for catalogs, batch generation, history and playback.
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.config import APP_NAME, APP_VERSION, SERVER_HOST, SERVER_PORT, ConfigurationError, get_api_key
from app.database import init_db, close_db
from app.services.batch_manager import get_batch_manager
from app.routers import (
    health_router,
    catalog_router,
    batches_router,
    history_router,
    styles_router,
    playback_router,
    scripts_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup:
        - Initialize database and create tables
        - Check the API key is configured

    Shutdown:
        - Wait for running batches to finish
        - Close database connections
    """
    print(f'Starting {APP_NAME} v{APP_VERSION}...')

    # Initialize database
    print('Initializing database...')
    await init_db()

    try:
        get_api_key()
    except ConfigurationError:
        # The server still serves history; batches are refused until a key is set
        print('GOOGLE_API_KEY is not set - speech generation is disabled')

    print(f'Server ready at http://{SERVER_HOST}:{SERVER_PORT}')
    print('API documentation available at /docs')

    yield

    # Shutdown
    print('Shutting down...')

    # Outstanding requests run to completion
    await get_batch_manager().shutdown()

    # Close database
    await close_db()

    print('Shutdown complete.')


# Create FastAPI application
app = FastAPI(
    title=APP_NAME,
    description='Batch speech generation across voices and styles.',
    version=APP_VERSION,
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(catalog_router)
app.include_router(batches_router)
app.include_router(history_router)
app.include_router(styles_router)
app.include_router(playback_router)
app.include_router(scripts_router)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    uvicorn.run(
        app,
        host=SERVER_HOST,
        port=SERVER_PORT,
        reload=False,
        log_level='info',
    )
