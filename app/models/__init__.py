"""
Data models.
"""
from app.models.history import Base, HistoryEntry
from app.models.job import AudioArtifact, Job, JobSpec, JobStatus

__all__ = [
    'Base',
    'HistoryEntry',
    'AudioArtifact',
    'Job',
    'JobSpec',
    'JobStatus',
]
