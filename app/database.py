"""
Async SQLite storage for generation history, using SQLAlchemy and aiosqlite.
"""
from typing import Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.config import DATABASE_URL, ensure_directories
from app.models import Base

# Milliseconds a connection waits on a locked database before failing
BUSY_TIMEOUT_MS = 5000


def build_engine(url: str = DATABASE_URL) -> AsyncEngine:
    """Create an engine whose connections wait on locks instead of failing at once."""
    new_engine = create_async_engine(url, echo=False, future=True)

    @event.listens_for(new_engine.sync_engine, 'connect')
    def _set_busy_timeout(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute(f'PRAGMA busy_timeout={BUSY_TIMEOUT_MS}')
        cursor.close()

    return new_engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    # Entries stay readable after the session that loaded them is closed
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine()
async_session_factory = build_session_factory(engine)


async def enable_wal_mode(bind: Optional[AsyncEngine] = None):
    """Switch the database to WAL so history reads never block on a batch save."""
    async with (bind or engine).begin() as conn:
        await conn.execute(text('PRAGMA journal_mode=WAL'))
        await conn.execute(text('PRAGMA synchronous=NORMAL'))


async def init_db(bind: Optional[AsyncEngine] = None):
    """Create the history table if it doesn't exist."""
    if bind is None:
        ensure_directories()
        bind = engine

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await enable_wal_mode(bind)


async def close_db():
    await engine.dispose()
