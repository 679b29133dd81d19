"""
Concurrent job scheduler for batch speech generation.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from app.config import MAX_CONCURRENT_JOBS
from app.models.job import Job, JobStatus
from app.services.retry_policy import RetryPolicy
from app.services.synthesis_client import SynthesisFailure
from app.services.transcoder import to_artifact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobEvent:
    """A status transition, with the status captured at publish time."""
    job: Job
    status: JobStatus


JobListener = Callable[[JobEvent], None]


class JobScheduler:
    """
    Runs a batch of jobs using a fixed pool of asyncio workers.

    Workers drain a shared asyncio.Queue, so each job is dequeued exactly
    once and at most `concurrency` jobs are running at any time. Status
    transitions are published to subscribed listeners as they happen.
    """

    def __init__(
        self,
        client,
        concurrency: int = MAX_CONCURRENT_JOBS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if concurrency < 1:
            raise ValueError('concurrency must be at least 1')
        self.concurrency = concurrency
        self._retry = RetryPolicy(client, sleep=sleep)
        self._listeners: List[JobListener] = []

    def subscribe(self, listener: JobListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, job: Job):
        event = JobEvent(job=job, status=job.status)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # Listener errors never reach the job or later listeners
                logger.exception('Job listener failed for job %s', job.id)

    async def run(self, jobs: List[Job]) -> List[Job]:
        """
        Execute every job to a terminal state.

        Returns once all jobs have succeeded or failed. In-flight jobs
        are never cancelled.
        """
        queue: asyncio.Queue[Job] = asyncio.Queue()
        for job in jobs:
            queue.put_nowait(job)
            self._publish(job)

        worker_count = min(self.concurrency, queue.qsize())
        if worker_count:
            await asyncio.gather(*(self._worker(queue, n) for n in range(worker_count)))
        return jobs

    async def _worker(self, queue: 'asyncio.Queue[Job]', worker_id: int):
        while True:
            try:
                job = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            await self._process_job(job)
            queue.task_done()

    async def _process_job(self, job: Job):
        """Drive a single job through synthesis and transcoding."""
        job.mark_running()
        self._publish(job)

        error: Optional[str] = None
        try:
            outcome = await self._retry.execute(job.spec)
            if isinstance(outcome, SynthesisFailure):
                error = outcome.reason
            else:
                artifact = to_artifact(outcome.audio, outcome.mime_type)
        except ValueError as e:
            error = str(e)
        except Exception as e:
            logger.exception('Unexpected error processing job %s', job.id)
            error = str(e) or e.__class__.__name__

        if error is None:
            job.mark_succeeded(artifact)
        else:
            job.mark_failed(error)
            logger.error('Job %s failed: %s', job.id, error)
        self._publish(job)
