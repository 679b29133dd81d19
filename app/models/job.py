"""
In-memory job records for batch speech generation.
"""
import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


class JobStatus(str, enum.Enum):
    """Status states for synthesis jobs."""
    pending = 'pending'
    running = 'running'
    succeeded = 'succeeded'
    failed = 'failed'


TERMINAL_STATUSES = frozenset({JobStatus.succeeded, JobStatus.failed})


class InvalidTransitionError(RuntimeError):
    """Raised when a job is moved to a status its current status does not allow."""


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored by SQLite."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class JobSpec:
    """
    Immutable description of one synthesis request.

    Attributes:
        voice: Prebuilt voice name
        model: Synthesis model id
        text: Text to synthesize
        style_tag: Short style directive, e.g. '[whispering]'
        custom_style: Free-text directive; replaces style_tag when non-blank
    """
    voice: str
    model: str
    text: str
    style_tag: Optional[str] = None
    custom_style: Optional[str] = None


@dataclass(frozen=True)
class AudioArtifact:
    """Synthesized audio payload plus its container type."""
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class Job:
    """
    Represents one dispatched synthesis job.

    Attributes:
        spec: What to synthesize
        id: Unique job identifier (UUID)
        status: Current job status
        artifact: Generated audio, present iff succeeded
        error_message: Error details, present iff failed
        created_at: Job creation timestamp
        started_at: When a worker picked the job up
        completed_at: When the job reached a terminal status
        duration_ms: Time between start and completion
    """
    spec: JobSpec
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: JobStatus = JobStatus.pending
    artifact: Optional[AudioArtifact] = None
    error_message: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_ms: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def mark_running(self):
        if self.status != JobStatus.pending:
            raise InvalidTransitionError(f'Job {self.id} is not pending (status: {self.status.value})')
        self.status = JobStatus.running
        self.started_at = utcnow()

    def mark_succeeded(self, artifact: AudioArtifact):
        self._finish(JobStatus.succeeded)
        self.artifact = artifact

    def mark_failed(self, error_message: str):
        self._finish(JobStatus.failed)
        self.error_message = error_message

    def abort(self, error_message: str):
        """Fail a job that will never finish normally, whether or not it started."""
        self._finish(JobStatus.failed, allowed=(JobStatus.pending, JobStatus.running))
        self.error_message = error_message

    def _finish(self, status: JobStatus, allowed=(JobStatus.running,)):
        if self.status not in allowed:
            raise InvalidTransitionError(f'Job {self.id} cannot finish from status {self.status.value}')
        self.status = status
        self.completed_at = utcnow()
        if self.started_at is not None:
            self.duration_ms = int((self.completed_at - self.started_at).total_seconds() * 1000)

    def __repr__(self):
        return f'<Job {self.id} status={self.status.value}>'
