"""
Durable store of completed generations.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import select, func, delete, literal_column
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.catalog import model_label, style_label
from app.database import async_session_factory
from app.models.history import HistoryEntry
from app.models.job import Job, JobStatus, utcnow

logger = logging.getLogger(__name__)

_last_timestamp: Optional[datetime] = None


def monotonic_utcnow() -> datetime:
    """
    Wall-clock UTC time that never repeats or goes backwards in this process.

    Entries recorded in the same microsecond (or across a clock step back)
    still get strictly increasing timestamps.
    """
    global _last_timestamp
    now = utcnow()
    if _last_timestamp is not None and now <= _last_timestamp:
        now = _last_timestamp + timedelta(microseconds=1)
    _last_timestamp = now
    return now


def entry_from_job(job: Job, created_at: Optional[datetime] = None) -> HistoryEntry:
    """
    Copy a succeeded job into a new history entry.

    The audio bytes are copied so the entry does not share the job's artifact.
    """
    if job.status != JobStatus.succeeded or job.artifact is None:
        raise ValueError(f'Job {job.id} has no audio to save (status: {job.status.value})')

    spec = job.spec
    return HistoryEntry(
        id=job.id,
        voice=spec.voice,
        model=spec.model,
        model_label=model_label(spec.model),
        style_preset=spec.style_tag or '',
        style_label=style_label(spec.style_tag, spec.custom_style),
        custom_style=spec.custom_style or '',
        text=spec.text,
        audio=bytes(bytearray(job.artifact.data)),
        mime_type=job.artifact.mime_type,
        created_at=created_at or monotonic_utcnow(),
    )


class HistoryStore:
    """
    Keyed store of HistoryEntry records backed by SQLite.

    Every operation opens its own session and runs in a single
    transaction, so readers never observe a partial write.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def insert(self, entry: HistoryEntry) -> HistoryEntry:
        """Insert or replace an entry by id."""
        async with self._session_factory() as session:
            async with session.begin():
                merged = await session.merge(entry)
        return merged

    async def list_all(self, limit: Optional[int] = None, offset: int = 0) -> List[HistoryEntry]:
        """
        List entries newest first.

        Entries with equal timestamps are returned most recently inserted first.
        """
        query = (
            select(HistoryEntry)
            .order_by(
                HistoryEntry.created_at.desc(),
                literal_column('generations.rowid').desc(),
            )
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)

        async with self._session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get(self, entry_id: str) -> Optional[HistoryEntry]:
        async with self._session_factory() as session:
            return await session.get(HistoryEntry, entry_id)

    async def count(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(select(func.count(HistoryEntry.id)))
            return result.scalar()

    async def delete(self, entry_id: str):
        """Remove one entry. Missing ids are ignored."""
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(delete(HistoryEntry).where(HistoryEntry.id == entry_id))

    async def clear(self):
        """Remove all entries."""
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(delete(HistoryEntry))
        logger.info('Cleared %d history entries', result.rowcount)


# Singleton instance
_history_store: Optional[HistoryStore] = None


def get_history_store() -> HistoryStore:
    """Get the history store singleton bound to the application database."""
    global _history_store
    if _history_store is None:
        _history_store = HistoryStore(async_session_factory)
    return _history_store


def reset_history_store():
    """Reset the history store singleton (for testing)."""
    global _history_store
    _history_store = None
