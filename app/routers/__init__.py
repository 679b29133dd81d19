"""
FastAPI routers.
"""
from app.routers.health import router as health_router
from app.routers.catalog import router as catalog_router
from app.routers.batches import router as batches_router
from app.routers.history import router as history_router
from app.routers.styles import router as styles_router
from app.routers.playback import router as playback_router
from app.routers.scripts import router as scripts_router

__all__ = [
    'health_router',
    'catalog_router',
    'batches_router',
    'history_router',
    'styles_router',
    'playback_router',
    'scripts_router',
]
