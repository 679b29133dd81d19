"""
Batch orchestration: validation, expansion, execution and persistence.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from sqlalchemy.exc import SQLAlchemyError

from app.catalog import get_model, get_voice
from app.config import MAX_TEXT_BYTES, MAX_CONCURRENT_JOBS, get_api_key
from app.models.job import Job, JobSpec, JobStatus, utcnow
from app.services.history_store import HistoryStore, entry_from_job, get_history_store
from app.services.job_scheduler import JobEvent, JobScheduler
from app.services.playback import PlaybackCoordinator, get_playback_coordinator
from app.services.synthesis_client import SynthesisClient

logger = logging.getLogger(__name__)


class BatchValidationError(ValueError):
    """Raised when a batch request is rejected before any job is created."""


class BatchNotFoundError(KeyError):
    """Raised for unknown or released batch ids."""


@dataclass
class Batch:
    """
    A set of jobs submitted together.

    Attributes:
        id: Unique batch identifier (UUID)
        jobs: One job per voice/style combination
        created_at: Batch creation timestamp
        completed_at: When every job reached a terminal status
        warnings: Batch-level problems, e.g. history write failures
        saved_count: Number of jobs persisted to history
    """
    jobs: List[Job]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    warnings: List[str] = field(default_factory=list)
    saved_count: int = 0

    @property
    def is_complete(self) -> bool:
        return all(job.is_terminal for job in self.jobs)

    @property
    def status(self) -> str:
        return 'completed' if self.completed_at is not None else 'running'

    def get_job(self, job_id: str) -> Optional[Job]:
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None


def text_byte_length(text: str) -> int:
    return len(text.encode('utf-8'))


def validate_batch_request(
    text: str,
    voices: Sequence[str],
    model: str,
    style_tags: Sequence[str] = (),
    custom_styles: Sequence[str] = (),
):
    """
    Reject requests that must not reach the synthesis API.

    Raises:
        BatchValidationError: with a single descriptive message
    """
    if not text or not text.strip():
        raise BatchValidationError('text is required')

    size = text_byte_length(text)
    if size > MAX_TEXT_BYTES:
        raise BatchValidationError(f'text is too long: {size} bytes (maximum {MAX_TEXT_BYTES})')

    if not voices:
        raise BatchValidationError('select at least one voice')

    unknown = [v for v in voices if get_voice(v) is None]
    if unknown:
        raise BatchValidationError(f'unknown voice: {", ".join(unknown)}')

    if get_model(model) is None:
        raise BatchValidationError(f'unknown model: {model}')


def style_variants(
    style_tags: Iterable[str] = (),
    custom_styles: Iterable[str] = (),
) -> List[Tuple[Optional[str], Optional[str]]]:
    """
    (style_tag, custom_style) pairs: each tag, then each non-blank custom style.

    With nothing selected there is a single unstyled variant.
    """
    variants: List[Tuple[Optional[str], Optional[str]]] = []
    for tag in style_tags:
        variants.append((tag or None, None))
    for custom in custom_styles:
        if custom and custom.strip():
            variants.append((None, custom.strip()))
    return variants or [(None, None)]


def expand_specs(
    text: str,
    voices: Sequence[str],
    model: str,
    style_tags: Sequence[str] = (),
    custom_styles: Sequence[str] = (),
) -> List[JobSpec]:
    """Cross every voice with every style variant."""
    return [
        JobSpec(voice=voice, model=model, text=text, style_tag=tag, custom_style=custom)
        for voice in voices
        for tag, custom in style_variants(style_tags, custom_styles)
    ]


class BatchManager:
    """
    Owns in-flight and finished batches for the lifetime of the process.

    Artifacts stay in memory until the batch is released; history holds
    its own copy, so releasing a batch never touches persisted entries.
    """

    def __init__(
        self,
        history_store: Optional[HistoryStore] = None,
        playback: Optional[PlaybackCoordinator] = None,
        client_factory: Callable[[str], SynthesisClient] = SynthesisClient,
        concurrency: int = MAX_CONCURRENT_JOBS,
        sleep=asyncio.sleep,
    ):
        self._history = history_store or get_history_store()
        self._playback = playback or get_playback_coordinator()
        self._client_factory = client_factory
        self._concurrency = concurrency
        self._sleep = sleep
        self._batches: Dict[str, Batch] = {}
        self._tasks: Dict[str, asyncio.Task] = {}
        self._listeners: List[Callable[[JobEvent], None]] = []

    def subscribe(self, listener: Callable[[JobEvent], None]):
        """Observe job transitions of every batch run from now on."""
        self._listeners.append(listener)

    def create_batch(
        self,
        text: str,
        voices: Sequence[str],
        model: str,
        style_tags: Sequence[str] = (),
        custom_styles: Sequence[str] = (),
    ) -> Batch:
        """
        Validate a request and expand it into pending jobs.

        Raises:
            BatchValidationError: if the request is invalid
            ConfigurationError: if no API key is configured
        """
        validate_batch_request(text, voices, model, style_tags, custom_styles)
        get_api_key()

        specs = expand_specs(text, voices, model, style_tags, custom_styles)
        batch = Batch(jobs=[Job(spec=spec) for spec in specs])
        self._batches[batch.id] = batch
        logger.info('Created batch %s with %d jobs', batch.id, len(batch.jobs))
        return batch

    async def run_batch(self, batch: Batch) -> Batch:
        """Run every job of a batch, then save the successful ones to history."""
        async with self._client_factory(get_api_key()) as client:
            scheduler = JobScheduler(client, concurrency=self._concurrency, sleep=self._sleep)
            scheduler.subscribe(lambda event, owner=batch: self._on_job_event(owner, event))
            for listener in self._listeners:
                scheduler.subscribe(listener)
            await scheduler.run(batch.jobs)

        batch.completed_at = utcnow()
        await self._save_history(batch)

        succeeded = sum(1 for job in batch.jobs if job.status == JobStatus.succeeded)
        logger.info('Batch %s finished: %d/%d succeeded', batch.id, succeeded, len(batch.jobs))
        return batch

    def _on_job_event(self, batch: Batch, event: JobEvent):
        # Results of a released batch are no longer playable
        if event.status == JobStatus.succeeded and self._batches.get(batch.id) is batch:
            self._playback.register(event.job.id)

    async def _save_history(self, batch: Batch):
        for job in batch.jobs:
            if job.status != JobStatus.succeeded:
                continue
            try:
                await self._history.insert(entry_from_job(job))
            except SQLAlchemyError as e:
                message = f'Could not save job {job.id} to history: {e}'
                logger.warning(message)
                batch.warnings.append(message)
            else:
                batch.saved_count += 1

    async def submit(
        self,
        text: str,
        voices: Sequence[str],
        model: str,
        style_tags: Sequence[str] = (),
        custom_styles: Sequence[str] = (),
    ) -> Batch:
        """Create a batch and run it in the background."""
        batch = self.create_batch(text, voices, model, style_tags, custom_styles)
        task = asyncio.create_task(self._run_submitted(batch))
        self._tasks[batch.id] = task
        task.add_done_callback(lambda t, batch_id=batch.id: self._tasks.pop(batch_id, None))
        return batch

    async def _run_submitted(self, batch: Batch):
        try:
            await self.run_batch(batch)
        except Exception as e:
            logger.exception('Batch %s crashed', batch.id)
            self._abort_unfinished(batch, f'Batch aborted: {e}')

    def _abort_unfinished(self, batch: Batch, message: str):
        """Fail every job a crashed batch left behind so the batch can complete."""
        for job in batch.jobs:
            if job.is_terminal:
                continue
            job.abort(message)
            event = JobEvent(job=job, status=job.status)
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception('Job listener failed for job %s', job.id)
        batch.warnings.append(message)
        if batch.completed_at is None:
            batch.completed_at = utcnow()

    async def wait(self, batch_id: str) -> Batch:
        """Wait for a submitted batch to finish."""
        batch = self.get_batch(batch_id)
        task = self._tasks.get(batch_id)
        if task is not None:
            await asyncio.shield(task)
        return batch

    def get_batch(self, batch_id: str) -> Batch:
        batch = self._batches.get(batch_id)
        if batch is None:
            raise BatchNotFoundError(batch_id)
        return batch

    def list_batches(self) -> List[Batch]:
        return sorted(self._batches.values(), key=lambda b: b.created_at, reverse=True)

    def release(self, batch_id: str):
        """
        Drop a batch and its in-memory artifacts.

        A running batch keeps running and is still saved to history;
        only its results stop being held here.
        """
        batch = self._batches.pop(batch_id, None)
        if batch is None:
            raise BatchNotFoundError(batch_id)
        for job in batch.jobs:
            self._playback.unregister(job.id)

    async def shutdown(self):
        """Wait for outstanding batches; in-flight requests are never cancelled."""
        tasks: Set[asyncio.Task] = set(self._tasks.values())
        if tasks:
            logger.info('Waiting for %d running batches', len(tasks))
            await asyncio.gather(*tasks, return_exceptions=True)


# Singleton instance
_batch_manager: Optional[BatchManager] = None


def get_batch_manager() -> BatchManager:
    """Get the batch manager singleton instance."""
    global _batch_manager
    if _batch_manager is None:
        _batch_manager = BatchManager()
    return _batch_manager


def reset_batch_manager():
    """Reset the batch manager singleton (for testing)."""
    global _batch_manager
    _batch_manager = None
